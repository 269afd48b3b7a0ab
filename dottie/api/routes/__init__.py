from .health import router as health_router
from .hello import router as hello_router
from .user import router as user_router

__all__ = [
    "hello_router",
    "health_router",
    "user_router",
]
