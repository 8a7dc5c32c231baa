import logging
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from bloodbank.core import config

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    if database_url.startswith('sqlite'):
        return create_engine(database_url, connect_args={'check_same_thread': False})

    return create_engine(
        database_url,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        connect_args={'options': f'-c statement_timeout={config.DB_STATEMENT_TIMEOUT_MS}'},
    )


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_users_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def has_unique_email_index(bind: Engine) -> bool:
    inspector = inspect(bind)

    for constraint in inspector.get_unique_constraints('users'):
        if constraint['column_names'] == ['email']:
            return True

    for index in inspector.get_indexes('users'):
        if index.get('unique') and index['column_names'] == ['email']:
            return True

    return False


def ensure_users_schema(bind: Engine | None = None) -> None:
    """Add the unique email index to a ``users`` table created without one.

    Tables created from the ORM model already carry it; older tables built
    by hand do not, and two concurrent registrations could then both land.
    """
    global _users_schema_checked

    target = bind or engine
    if target is engine and _users_schema_checked:
        return

    with _schema_lock:
        if target is engine and _users_schema_checked:
            return

        if 'users' in inspect(target).get_table_names() and not has_unique_email_index(target):
            logger.warning('users.email has no unique index; adding uq_users_email')
            with target.begin() as connection:
                connection.execute(
                    text('CREATE UNIQUE INDEX IF NOT EXISTS uq_users_email ON users(email)')
                )

        if target is engine:
            _users_schema_checked = True
