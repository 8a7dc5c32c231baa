import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bloodbank.database import get_db
from bloodbank.models.blood_record import BloodRecord

router = APIRouter(tags=['donors'])

logger = logging.getLogger(__name__)


class SubmitDonorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    blood_group: str = Field(alias='bloodGroup')

    @field_validator('name', 'blood_group')
    @classmethod
    def validate_required(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Field is required.')
        return normalized


class BloodRecordResponse(BaseModel):
    id: int
    name: str
    blood_group: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


@router.post('/submit', response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def submit_donor(data: SubmitDonorRequest, db: Session = Depends(get_db)):
    try:
        db.add(BloodRecord(name=data.name, blood_group=data.blood_group))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to save donor record')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Error saving data',
        ) from exc

    return {'message': 'Data saved successfully'}


@router.get('/data', response_model=list[BloodRecordResponse])
def list_donors(db: Session = Depends(get_db)):
    try:
        return db.query(BloodRecord).order_by(BloodRecord.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.exception('Failed to fetch donor records')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Error fetching data',
        ) from exc


@router.delete('/data/{record_id}', response_model=MessageResponse)
def delete_donor(record_id: int, db: Session = Depends(get_db)):
    try:
        record = db.query(BloodRecord).filter(BloodRecord.id == record_id).first()

        if not record:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='Record not found',
            )

        db.delete(record)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to delete donor record %s', record_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Error deleting data',
        ) from exc

    return {'message': 'Data deleted successfully'}
