from fastapi import APIRouter, Depends
from pydantic import BaseModel
from authapi.api.dependencies import require_user
from authapi.models.user import User

router = APIRouter(prefix="/secrets", tags=["secrets"])

SECRET_MESSAGE = "All ok! - This is a super secret message"


class SecretResponse(BaseModel):
    secret: str


@router.get("", response_model=SecretResponse)
def read_secret(current_user: User = Depends(require_user)):
    """Protected resource - only reachable with a valid access token"""
    return {"secret": SECRET_MESSAGE}
