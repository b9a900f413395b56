from pydantic import BaseModel, Field


class GalleryLoginRequest(BaseModel):
    """DTO for gallery login request"""
    password: str = Field(min_length=1, max_length=256)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
