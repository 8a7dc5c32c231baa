import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('JWT_SECRET', 'test-signing-secret-0123456789abcdef')

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bloodbank.auth.service import AuthService  # noqa: E402
from bloodbank.database import Base  # noqa: E402
from bloodbank.models.blood_record import BloodRecord  # noqa: E402
from bloodbank.models.user import User  # noqa: E402

TEST_SECRET = 'test-signing-secret-0123456789abcdef'


@pytest.fixture
def test_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, BloodRecord.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[BloodRecord.__table__, User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def auth_service(session_factory):
    # Lowest bcrypt cost keeps the suite fast.
    return AuthService(session_factory, TEST_SECRET, bcrypt_rounds=4)
