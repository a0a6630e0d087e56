import logging
from fastapi import Depends, Header, Request
from authapi.core.exceptions import NotAuthenticatedError
from authapi.models.user import User
from authapi.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def get_auth_service(request: Request) -> AuthService:
    """Auth service built by the app factory at startup"""
    return request.app.state.auth_service


def require_user(
    request: Request,
    authorization: str | None = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Guard for protected routes.

    Runs before the route handler. The Authorization header value is the
    access token itself, matched exactly. If it belongs to a user, the user is
    attached to request.state and returned; otherwise NotAuthenticatedError
    stops the request with 401 and the handler never executes.
    """
    user = auth_service.verify_access(authorization)
    if user is None:
        logger.info(f"Rejected request to {request.url.path}: unknown or missing access token")
        raise NotAuthenticatedError()

    request.state.user = user
    return user
