from .base import ErrorResponse, MessageResponse, StandardResponse
from .health import DBHealthResponse, SimpleHealthResponse
from .users import UserRole, UserUpdate

__all__ = [
    # Base schemas
    'StandardResponse', 'ErrorResponse', 'MessageResponse',

    # User schemas
    'UserRole', 'UserUpdate',

    # Health schemas
    'SimpleHealthResponse', 'DBHealthResponse'
]
