from dottie.services.user_service import UserService, user_service


def get_user_service() -> UserService:
    """Dependency to get the user service"""
    return user_service
