# Standard library imports
from typing import Any, Dict

# External package imports
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...core.security import verify_gallery_token


bearer_scheme = HTTPBearer(auto_error=True)


async def require_gallery_access(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """Claims of a valid gallery token; 401 otherwise."""
    try:
        return verify_gallery_token(credentials.credentials)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exception),
            headers={"WWW-Authenticate": "Bearer"},
        )
