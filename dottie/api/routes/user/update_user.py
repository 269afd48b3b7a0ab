from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from dottie.api.dependencies import get_user_service
from dottie.database import get_db
from dottie.schemas.base import StandardResponse
from dottie.schemas.users import UserUpdate
from dottie.services.user_service import UserService
from dottie.utils.responses import standard_response

router = APIRouter()


@router.put(
    "/{user_id}",
    response_model=StandardResponse,
    summary="Update user",
    responses={
        200: {"description": "User updated successfully"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"}
    }
)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db)
):
    """Update user information; fields left out of the body are unchanged"""
    try:
        user_response, status_code = await service.update_user(user_id, user_data, db)

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
                message="Failed to update user",
                error="Internal server error",
                status_code=status_code
            )

        return standard_response(
            success=True,
            message="User updated successfully",
            data=user_response,
            status_code=status.HTTP_200_OK
        )

    except Exception as e:
        logger.error("Error updating user {}: {}", user_id, e)
        return standard_response(
            success=False,
            message="Failed to update user",
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
