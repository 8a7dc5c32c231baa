"""Registration, login and token verification for the login service.

The service owns no global state: the session factory, signing secret,
token lifetime and bcrypt cost are handed in when it is built, once per
process, and never change afterwards.
"""

import logging
import re
from datetime import timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bloodbank.auth import jwt_handler
from bloodbank.auth.password import MAX_PASSWORD_BYTES, hash_password, verify_password
from bloodbank.core import config
from bloodbank.core.errors import (
    AuthenticationFailure,
    DuplicateAccount,
    StorageFailure,
    ValidationFailure,
)
from bloodbank.models.user import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'[^@\s]+@[^@\s]+')


def _require(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationFailure(f'{field} is required.')
    return value


def validate_email(email: str | None) -> str:
    email = _require('email', email)
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationFailure('email is not a valid address.')
    return email


def validate_password(password: str | None) -> str:
    password = _require('password', password)
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationFailure(f'password must be {MAX_PASSWORD_BYTES} bytes or fewer.')
    return password


class AuthService:
    def __init__(
        self,
        session_factory: sessionmaker,
        token_secret: str,
        *,
        token_ttl: timedelta | None = None,
        algorithm: str | None = None,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._token_secret = token_secret
        if token_ttl is None:
            token_ttl = timedelta(minutes=config.JWT_EXPIRES_MINUTES)
        self._token_ttl = token_ttl
        self._algorithm = algorithm or config.JWT_ALGORITHM
        self._bcrypt_rounds = config.BCRYPT_ROUNDS if bcrypt_rounds is None else bcrypt_rounds
        self._dummy_digest: str | None = None

    def register(self, name: str | None, email: str | None, password: str | None) -> User:
        name = _require('name', name)
        email = validate_email(email)
        password = validate_password(password)

        user = User(
            name=name,
            email=email,
            password_digest=hash_password(password, rounds=self._bcrypt_rounds),
        )

        db: Session = self._session_factory()
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as exc:
            db.rollback()
            if self._email_taken(db, email):
                logger.warning('Registration rejected: account already exists for %s', email)
                raise DuplicateAccount('An account with this email already exists.') from exc
            logger.exception('Registration violated a constraint for %s', email)
            raise StorageFailure('Could not store the new account.') from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Registration failed for %s', email)
            raise StorageFailure('Could not store the new account.') from exc
        finally:
            db.close()

        logger.info('Registered user %s (id=%s)', email, user.id)
        return user

    def login(self, email: str | None, password: str | None) -> str:
        """Verify credentials and return a signed token carrying ``{email}``.

        Unknown email and wrong password both raise ``AuthenticationFailure``
        after the same amount of bcrypt work.
        """
        email = _require('email', email)
        password = _require('password', password)

        db: Session = self._session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            logger.exception('User lookup failed for %s', email)
            raise StorageFailure('Could not look up the account.') from exc
        finally:
            db.close()

        if user is None:
            verify_password(password, self._get_dummy_digest())
            logger.info('Login failed for %s', email)
            raise AuthenticationFailure('Invalid credentials')

        if not verify_password(password, user.password_digest):
            logger.info('Login failed for %s', email)
            raise AuthenticationFailure('Invalid credentials')

        logger.info('Login succeeded for %s', email)
        return self.issue_token(email)

    def issue_token(self, email: str) -> str:
        return jwt_handler.create_access_token(
            {'email': email},
            self._token_secret,
            ttl=self._token_ttl,
            algorithm=self._algorithm,
        )

    def verify_token(self, token: str) -> dict:
        return jwt_handler.decode_access_token(token, self._token_secret, algorithm=self._algorithm)

    @staticmethod
    def _email_taken(db: Session, email: str) -> bool:
        try:
            return db.query(User.id).filter(User.email == email).first() is not None
        except SQLAlchemyError:
            logger.exception('Could not check for an existing account for %s', email)
            return False

    def _get_dummy_digest(self) -> str:
        if self._dummy_digest is None:
            self._dummy_digest = hash_password('not-a-real-password', rounds=self._bcrypt_rounds)
        return self._dummy_digest
