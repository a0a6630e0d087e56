from typing import Any
from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, ValidationError
from authapi.api.dependencies import get_auth_service
from authapi.core.exceptions import RegistrationError, field_error
from authapi.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserCreatedResponse(BaseModel):
    id: str
    accessToken: str


def parse_user_create(payload: Any) -> UserCreate:
    """Validate a registration body, reporting problems as a RegistrationError"""
    try:
        return UserCreate.model_validate(payload)
    except ValidationError as exc:
        errors = {}
        for error in exc.errors():
            path = ".".join(str(part) for part in error["loc"]) or "body"
            errors[path] = field_error(path, error["type"], error["msg"])
        raise RegistrationError(errors=errors)


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: Any = Body(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and return its id and access token"""
    # Body is validated here so malformed input gets the same 400 shape as a taken name/email
    user_data = parse_user_create(payload)
    user = auth_service.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return {"id": user.id, "accessToken": user.access_token}
