"""User model definitions."""

from sqlalchemy import Column, Integer, String
from bloodbank.database import Base


class User(Base):
    """A login-service account. Email comparison is case-sensitive."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Legacy column name kept so databases created by the old service still map.
    password_digest = Column("password", String, nullable=False)
