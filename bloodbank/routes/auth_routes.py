from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from bloodbank.auth.dependencies import get_auth_service, get_current_email
from bloodbank.auth.service import AuthService
from bloodbank.core.errors import AuthenticationFailure, StorageFailure, ValidationFailure

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"
REGISTER_FAILED = "Error registering user"
LOGIN_FAILED = "Error logging in"


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class MeResponse(BaseModel):
    email: str


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    try:
        auth_service.register(name=data.name, email=data.email, password=data.password)
    except ValidationFailure as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageFailure as exc:
        # Duplicate accounts are reported like any other storage failure.
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=REGISTER_FAILED,
        ) from exc

    return {"message": "User registered"}


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    try:
        token = auth_service.login(email=data.email, password=data.password)
    except ValidationFailure as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AuthenticationFailure as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS) from exc
    except StorageFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=LOGIN_FAILED,
        ) from exc

    return {"token": token}


@router.get("/me", response_model=MeResponse)
def me(email: str = Depends(get_current_email)):
    return {"email": email}
