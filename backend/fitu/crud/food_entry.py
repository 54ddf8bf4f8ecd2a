from datetime import datetime
from sqlalchemy.orm import Session
from fitu.models.tracking import FoodEntry
from fitu.schemas.tracking import FoodEntryCreate, FoodEntryUpdate
from fitu.utils.dates import to_local_naive

"""
Food Entry CRUD
---------------
Pure Database Access Object for calorie entries.
Aggregation lives in fitu.services.balance_service.
"""

# Optional columns a PUT may clear with an explicit null
CLEARABLE_FIELDS = {"brand", "notes"}


def get_food_entries_between(db: Session, user_id: str, start: datetime, end: datetime):
    """All entries consumed within [start, end], oldest first."""
    return db.query(FoodEntry).filter(
        FoodEntry.user_id == user_id,
        FoodEntry.consumed_at.between(start, end)
    ).order_by(FoodEntry.consumed_at.asc()).all()


def get_user_food_entry(db: Session, user_id: str, entry_id: int):
    """Entries are only visible to their owner."""
    return db.query(FoodEntry).filter(
        FoodEntry.id == entry_id,
        FoodEntry.user_id == user_id
    ).first()


def create_food_entry(db: Session, user_id: str, entry: FoodEntryCreate, consumed_at: datetime):
    db_entry = FoodEntry(
        user_id=user_id,
        consumed_at=consumed_at,
        **entry.model_dump(exclude={"consumed_at"})
    )
    db.add(db_entry)
    db.commit()
    db.refresh(db_entry)
    return db_entry


def update_food_entry(db: Session, user_id: str, entry_id: int, entry_update: FoodEntryUpdate):
    db_entry = get_user_food_entry(db, user_id, entry_id)
    if not db_entry:
        return None

    for field, value in entry_update.model_dump(exclude_unset=True).items():
        if value is None and field not in CLEARABLE_FIELDS:
            continue
        if field == "consumed_at":
            value = to_local_naive(value)
        setattr(db_entry, field, value)

    db.commit()
    db.refresh(db_entry)
    return db_entry


def delete_food_entry(db: Session, user_id: str, entry_id: int):
    db_entry = get_user_food_entry(db, user_id, entry_id)
    if db_entry:
        db.delete(db_entry)
        db.commit()
    return db_entry
