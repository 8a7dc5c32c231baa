import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from bloodbank.database import Base, ensure_users_schema, has_unique_email_index
from bloodbank.models.user import User


@pytest.fixture
def legacy_engine():
    engine = create_engine('sqlite://')
    with engine.begin() as connection:
        connection.execute(
            text('CREATE TABLE users (id INTEGER PRIMARY KEY, name VARCHAR, email VARCHAR, password VARCHAR)')
        )
    try:
        yield engine
    finally:
        engine.dispose()


def test_orm_created_table_has_unique_email_index() -> None:
    engine = create_engine('sqlite://')
    Base.metadata.create_all(bind=engine, tables=[User.__table__])

    assert has_unique_email_index(engine)


def test_ensure_users_schema_adds_missing_unique_index(legacy_engine) -> None:
    assert not has_unique_email_index(legacy_engine)

    ensure_users_schema(bind=legacy_engine)

    assert has_unique_email_index(legacy_engine)
    with legacy_engine.begin() as connection:
        connection.execute(text("INSERT INTO users (name, email, password) VALUES ('a', 'a@x.com', 'x')"))
    with pytest.raises(IntegrityError):
        with legacy_engine.begin() as connection:
            connection.execute(text("INSERT INTO users (name, email, password) VALUES ('b', 'a@x.com', 'y')"))


def test_ensure_users_schema_is_a_noop_without_users_table() -> None:
    engine = create_engine('sqlite://')

    ensure_users_schema(bind=engine)

    assert 'users' not in inspect(engine).get_table_names()
