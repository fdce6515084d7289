"""
Request dependencies shared by the routers.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bank_api.config import get_settings
from bank_api.exceptions import AuthenticationError, Forbidden
from bank_api.schemas.auth import TokenUser
from bank_api.services.auth_service import verify_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenUser:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token not provided")

    payload = verify_token(credentials.credentials)
    try:
        return TokenUser(user_id=int(payload["sub"]), username=payload["username"])
    except ValueError:
        raise AuthenticationError("Invalid token") from None


def require_admin(user: TokenUser = Depends(get_current_user)) -> TokenUser:
    """
    Gate for administrative listings.

    Only usernames named in ADMIN_USERNAMES pass.
    """
    if user.username not in get_settings().ADMIN_USERNAMES:
        raise Forbidden("Administrator access required")
    return user
