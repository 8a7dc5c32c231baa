"""Donor submission model definitions."""

from sqlalchemy import Column, Integer, String
from bloodbank.database import Base


class BloodRecord(Base):
    """Represents one donor's name and blood group."""
    __tablename__ = "blood_data"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    blood_group = Column(String, nullable=False)
