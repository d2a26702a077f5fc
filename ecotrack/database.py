from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ecotrack.core.config import get_settings


def build_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(get_settings().database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from ecotrack.models import log_entry, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
