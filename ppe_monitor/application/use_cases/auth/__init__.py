from .login_gallery import GalleryLoginUseCase

__all__ = ["GalleryLoginUseCase"]
