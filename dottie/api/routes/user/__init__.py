from fastapi import APIRouter

from dottie.schemas.base import StandardResponse

from .delete_user import router as delete_user_router
from .get_all_users import list_users
from .get_all_users import router as get_all_users_router
from .get_user import router as get_user_router
from .update_user import router as update_user_router

router = APIRouter(tags=["Users"], prefix="/user")

# Mount user route modules
router.include_router(get_all_users_router)
router.include_router(get_user_router)
router.include_router(update_user_router)
router.include_router(delete_user_router)

# The bare base path lists users too, instead of redirecting to the trailing slash
router.add_api_route(
    "",
    list_users,
    methods=["GET"],
    response_model=StandardResponse,
    include_in_schema=False,
)

__all__ = ["router"]
