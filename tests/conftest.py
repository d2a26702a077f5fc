import os
import tempfile

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('UPLOAD_DIR', tempfile.mkdtemp(prefix='ecotrack-uploads-'))

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from starlette.requests import Request  # noqa: E402

from ecotrack.auth import jwt_handler  # noqa: E402
from ecotrack.core.config import Settings  # noqa: E402
from ecotrack.database import Base  # noqa: E402
from ecotrack.models.log_entry import LogEntry  # noqa: E402
from ecotrack.models.user import User  # noqa: E402

TEST_SECRET = 'test-secret-key-that-is-long-enough-for-hs256'


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        jwt_secret_key=TEST_SECRET,
        admin_password='letmein',
        upload_dir=str(tmp_path / 'uploads'),
    )


@pytest.fixture
def db_session():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[User.__table__, LogEntry.__table__])

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=[LogEntry.__table__, User.__table__])


def _build_request(path: str = '/', method: str = 'GET', cookies: dict | None = None) -> Request:
    headers = []
    if cookies:
        cookie_header = '; '.join(f'{name}={value}' for name, value in cookies.items())
        headers.append((b'cookie', cookie_header.encode()))
    return Request({
        'type': 'http',
        'method': method,
        'path': path,
        'headers': headers,
        'query_string': b'',
    })


@pytest.fixture
def make_request():
    return _build_request


@pytest.fixture
def token_cookie(settings: Settings):
    def _token_cookie(role: str, claims: dict | None = None, expires_minutes: int | None = None) -> dict:
        return {'token': jwt_handler.create_session_token(settings, role, claims, expires_minutes)}

    return _token_cookie
