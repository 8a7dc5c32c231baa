"""Failure types shared by the login and donor services."""


class BloodbankError(Exception):
    """Base class for every failure raised by the service layer."""


class ValidationFailure(BloodbankError):
    """A required field is missing, blank or malformed."""


class AuthenticationFailure(BloodbankError):
    """Unknown email or wrong password. The two causes are never told apart."""


class StorageFailure(BloodbankError):
    """The database connection or query failed."""


class DuplicateAccount(StorageFailure):
    """An account with the same email already exists."""


class InvalidToken(BloodbankError):
    """A bearer token failed signature, format or expiry checks."""


class ConfigurationFailure(BloodbankError, RuntimeError):
    """Required runtime configuration is missing."""
