from fastapi import APIRouter, Depends
from pydantic import BaseModel
from authapi.api.dependencies import get_auth_service
from authapi.services.auth_service import AuthService

router = APIRouter(prefix="/sessions", tags=["sessions"])


class SessionCreate(BaseModel):
    email: str
    password: str


@router.post("")
def login(
    credentials: SessionCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Log in with email and password.

    Bad credentials answer 200 with {"notFound": true} rather than 401.
    Existing clients rely on this, so keep it.
    """
    user = auth_service.login(email=credentials.email, password=credentials.password)
    if user is None:
        return {"notFound": True}
    return {"userId": user.id, "accessToken": user.access_token}
