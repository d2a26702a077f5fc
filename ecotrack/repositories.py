"""Database access for users and activity log entries."""

from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ecotrack.models.log_entry import LogEntry
from ecotrack.models.user import User


class DuplicateUserError(Exception):
    pass


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def create_user(db: Session, *, name: str, email: str, password_hash: str, avatar: str) -> User:
    if get_user_by_email(db, email) is not None:
        raise DuplicateUserError(email)

    user = User(name=name, email=email, password=password_hash, avatar=avatar)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise DuplicateUserError(email) from exc
    db.refresh(user)
    return user


def create_log_entry(
    db: Session,
    *,
    user_id: int,
    entry_date: date,
    activity: str,
    amount: float,
    carbon_emission: float,
) -> LogEntry:
    entry = LogEntry(
        user_id=user_id,
        date=entry_date,
        activity=activity,
        amount=amount,
        carbon_emission=carbon_emission,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_log_entries_for_user(db: Session, user_id: int) -> list[LogEntry]:
    return (
        db.query(LogEntry)
        .filter(LogEntry.user_id == user_id)
        .order_by(LogEntry.date.desc(), LogEntry.id.desc())
        .all()
    )


def summarize_activities(db: Session) -> list[tuple[str, float, float]]:
    """Total amount and emission per activity across all users."""
    rows = (
        db.query(
            LogEntry.activity,
            func.sum(LogEntry.amount),
            func.sum(LogEntry.carbon_emission),
        )
        .group_by(LogEntry.activity)
        .all()
    )
    return [(activity, total_amount or 0.0, total_emission or 0.0) for activity, total_amount, total_emission in rows]
