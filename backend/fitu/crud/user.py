from sqlalchemy.orm import Session
from fitu.models.user import User
from fitu.schemas.user import UserProfileUpdate

# activity_level and fitness_goal are NOT NULL, so a null there is ignored
CLEARABLE_FIELDS = {"email", "username", "daily_calorie_goal"}


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()


def upsert_user_profile(db: Session, user_id: str, profile: UserProfileUpdate):
    """
    Create the local profile row on first write, otherwise apply the
    fields that were explicitly sent.
    """
    db_user = get_user(db, user_id)
    update_data = profile.model_dump(exclude_unset=True)

    if not db_user:
        db_user = User(id=user_id)
        db.add(db_user)

    for field, value in update_data.items():
        if value is None and field not in CLEARABLE_FIELDS:
            continue
        setattr(db_user, field, value)

    db.commit()
    db.refresh(db_user)
    return db_user
