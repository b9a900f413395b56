# External package imports
from fastapi import APIRouter, HTTPException, status

# Local application imports
from ...application.dto.auth_dto import GalleryLoginRequest, TokenResponse
from ...application.use_cases.auth.login_gallery import GalleryLoginUseCase
from ...di.container import get_container


router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=TokenResponse)
async def login_gallery(request: GalleryLoginRequest) -> TokenResponse:
    """
    Exchange the gallery password for an access token

    Args:
        request: Gallery login request

    Returns:
        TokenResponse with access token
    """
    container = get_container()
    login_use_case = container.get(GalleryLoginUseCase)

    token_response = await login_use_case.execute(request)
    if token_response is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )
    return token_response
