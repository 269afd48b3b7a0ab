from fastapi import APIRouter

from dottie.schemas.base import MessageResponse

router = APIRouter(tags=["Hello"])

HELLO_MESSAGE = "Hello World from Dottie API!"


@router.get(
    "/api/hello",
    response_model=MessageResponse,
    summary="Hello World",
)
async def hello():
    return {"message": HELLO_MESSAGE}
