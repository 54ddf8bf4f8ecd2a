from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from fitu.models.tracking import ExerciseLog


def get_exercise_logs_between(db: Session, user_id: str, start: datetime, end: datetime):
    """All logs performed within [start, end], oldest first."""
    return db.query(ExerciseLog).filter(
        ExerciseLog.user_id == user_id,
        ExerciseLog.performed_at.between(start, end)
    ).order_by(ExerciseLog.performed_at.asc()).all()


def get_exercise_history(db: Session, user_id: str, since: datetime, until: Optional[datetime] = None):
    """Logs performed at or after `since`, newest first, with their catalog exercise loaded."""
    query = db.query(ExerciseLog).filter(
        ExerciseLog.user_id == user_id,
        ExerciseLog.performed_at >= since
    )
    if until is not None:
        query = query.filter(ExerciseLog.performed_at <= until)
    return query.order_by(ExerciseLog.performed_at.desc(), ExerciseLog.id.desc()).all()


def create_exercise_log(db: Session, user_id: str, **fields):
    db_log = ExerciseLog(user_id=user_id, **fields)
    db.add(db_log)
    db.commit()
    db.refresh(db_log)
    return db_log
