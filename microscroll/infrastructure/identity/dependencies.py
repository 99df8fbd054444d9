"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from microscroll.exceptions import UnauthorizedError
from microscroll.infrastructure.identity.token_service import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """
    Resolve the authenticated user id from the bearer token.

    Args:
        credentials: Authorization header parsed by HTTPBearer

    Returns:
        The opaque user id carried in the token subject

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise UnauthorizedError()

    user_id = verify_access_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError()
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
