from typing import Any, Dict, Optional, Tuple

from fastapi import status
from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dottie.models.user import User
from dottie.schemas.users import UserRole, UserUpdate


class UserService:
    """User lookups and mutations returning ``(payload, http_status)`` pairs.

    Every method works on the request's session; callers own its lifetime.
    """

    async def list_users(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[Optional[Dict[str, Any]], int]:
        """List users with pagination and filtering"""
        try:
            query = select(User)

            if role is not None:
                query = query.where(User.role == (role.value if hasattr(role, "value") else role))
            if is_active is not None:
                query = query.where(User.is_active == is_active)

            count_query = select(func.count()).select_from(query.subquery())
            total_count = (await db.execute(count_query)).scalar() or 0

            offset = (page - 1) * limit
            query = query.order_by(User.created_at.desc(), User.id.desc()).offset(offset).limit(limit)

            result = await db.execute(query)
            users = result.scalars().all()

            response_data = {
                "users": [user.to_dict() for user in users],
                "total_count": total_count,
                "page": page,
                "limit": limit,
                "total_pages": (total_count + limit - 1) // limit if limit > 0 else 0
            }

            return response_data, status.HTTP_200_OK

        except Exception as e:
            logger.error("Error listing users: {}", e)
            return None, status.HTTP_500_INTERNAL_SERVER_ERROR

    async def get_user_by_id(self, user_id: int, db: AsyncSession) -> Tuple[Optional[Dict[str, Any]], int]:
        """Get user by ID"""
        try:
            user = await db.get(User, user_id)

            if not user:
                return None, status.HTTP_404_NOT_FOUND

            return user.to_dict(), status.HTTP_200_OK

        except Exception as e:
            logger.error("Error getting user by ID {}: {}", user_id, e)
            return None, status.HTTP_500_INTERNAL_SERVER_ERROR

    async def update_user(self, user_id: int, user_data: UserUpdate, db: AsyncSession) -> Tuple[Optional[Dict[str, Any]], int]:
        """Apply the fields set on ``user_data`` to the user"""
        try:
            user = await db.get(User, user_id)

            if not user:
                return None, status.HTTP_404_NOT_FOUND

            update_data = user_data.model_dump(exclude_unset=True)
            if not update_data:
                return user.to_dict(), status.HTTP_200_OK

            for field, value in update_data.items():
                setattr(user, field, value.value if isinstance(value, UserRole) else value)

            await db.commit()
            await db.refresh(user)

            logger.info("Updated user {} fields: {}", user_id, sorted(update_data))
            return user.to_dict(), status.HTTP_200_OK

        except Exception as e:
            await db.rollback()
            logger.error("Error updating user {}: {}", user_id, e)
            return None, status.HTTP_500_INTERNAL_SERVER_ERROR

    async def delete_user(self, user_id: int, db: AsyncSession) -> Tuple[bool, int]:
        """Delete user"""
        try:
            user = await db.get(User, user_id)

            if not user:
                return False, status.HTTP_404_NOT_FOUND

            await db.delete(user)
            await db.commit()

            logger.info("Deleted user {}", user_id)
            return True, status.HTTP_200_OK

        except Exception as e:
            await db.rollback()
            logger.error("Error deleting user {}: {}", user_id, e)
            return False, status.HTTP_500_INTERNAL_SERVER_ERROR


# Create global instance
user_service = UserService()
