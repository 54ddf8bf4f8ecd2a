from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitu.database import get_db
from fitu.api.auth import get_current_user_id
from fitu.crud import user as crud_user
from fitu.exceptions import NotFoundError
from fitu.schemas.user import UserProfileResponse, UserProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=UserProfileResponse)
def read_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    db_user = crud_user.get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User", user_id)
    return db_user


@router.put("", response_model=UserProfileResponse)
def update_my_profile(
    profile: UserProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Create or update the profile of the authenticated user.
    Only the fields sent are changed.
    """
    return crud_user.upsert_user_profile(db, user_id, profile)
