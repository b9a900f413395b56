from .auth_controller import router as auth_router
from .analysis_controller import router as analysis_router
from .captures_controller import router as captures_router


__all__ = ["auth_router", "analysis_router", "captures_router"]
