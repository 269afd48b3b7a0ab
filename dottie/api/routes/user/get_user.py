from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from dottie.api.dependencies import get_user_service
from dottie.database import get_db
from dottie.schemas.base import StandardResponse
from dottie.services.user_service import UserService
from dottie.utils.responses import standard_response

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=StandardResponse,
    summary="Get user by ID",
    responses={
        200: {"description": "User retrieved successfully"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"}
    }
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db)
):
    """Get user by ID"""
    try:
        user_data, status_code = await service.get_user_by_id(user_id, db)

        if status_code == status.HTTP_404_NOT_FOUND:
            return standard_response(
                success=False,
                message="User not found",
                error=f"User with ID {user_id} not found",
                status_code=status.HTTP_404_NOT_FOUND
            )

        if status_code != status.HTTP_200_OK:
            return standard_response(
                success=False,
                message="Failed to retrieve user",
                error="Internal server error",
                status_code=status_code
            )

        return standard_response(
            success=True,
            message="User retrieved successfully",
            data=user_data,
            status_code=status.HTTP_200_OK
        )

    except Exception as e:
        logger.error("Error getting user {}: {}", user_id, e)
        return standard_response(
            success=False,
            message="Failed to retrieve user",
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
