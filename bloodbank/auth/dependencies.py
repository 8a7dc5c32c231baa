from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bloodbank.auth.service import AuthService
from bloodbank.core.errors import InvalidToken

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_current_email(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        payload = auth_service.verify_token(credentials.credentials)
    except InvalidToken as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    email = payload.get("email")
    if not email:
        raise HTTPException(status_code=401, detail="Invalid token")
    return email
