"""Request authentication helpers."""

from fastapi import HTTPException, status

from relay.domain.service import JWTService

BEARER_PREFIX = "bearer "


def token_from_request(
    auth_token: str | None, authorization: str | None
) -> str | None:
    """Pick the JWT from the auth cookie, falling back to a Bearer header."""
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def require_user_id(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
    action: str,
) -> str:
    """Resolve the acting user or reject the request.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        authorization: Authorization header value
        action: What the caller tried to do, for the error message

    Returns:
        Authenticated user ID

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    user_id = jwt_service.get_user_id_from_token(
        token_from_request(auth_token, authorization)
    )
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
