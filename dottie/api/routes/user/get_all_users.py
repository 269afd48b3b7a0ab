from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from dottie.api.dependencies import get_user_service
from dottie.database import get_db
from dottie.schemas.base import StandardResponse
from dottie.schemas.users import UserRole
from dottie.services.user_service import UserService
from dottie.utils.responses import standard_response

router = APIRouter()


@router.get(
    "/",
    response_model=StandardResponse,
    summary="List users",
    responses={
        200: {"description": "Users retrieved successfully"},
        500: {"description": "Internal server error"}
    }
)
async def list_users(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    is_active: Optional[bool] = Query(None, description="Filter by active status"),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db)
):
    """List users with pagination and filtering"""
    try:
        result, status_code = await service.list_users(db, page=page, limit=limit, role=role, is_active=is_active)

        if status_code != status.HTTP_200_OK:
            return standard_response(
                success=False,
                message="Failed to retrieve users",
                error="Internal server error",
                status_code=status_code
            )

        return standard_response(
            success=True,
            message="Users retrieved successfully",
            data=result,
            status_code=status.HTTP_200_OK
        )

    except Exception as e:
        logger.error("Failed to list users: {}", e)
        return standard_response(
            success=False,
            message="Failed to retrieve users",
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
