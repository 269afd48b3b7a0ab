import time

from fastapi import APIRouter, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger

from dottie.config import SERVICE_NAME, VERSION
from dottie.database import check_database_health
from dottie.schemas.health import DBHealthResponse, SimpleHealthResponse

router = APIRouter(tags=["Health"], prefix="/health")


@router.get(
    "",
    response_model=SimpleHealthResponse,
    summary="Liveness Check",
)
async def health_check():
    """Returns 200 whenever the process is serving requests"""
    return SimpleHealthResponse(
        success=True,
        status="healthy",
        service=SERVICE_NAME,
        version=VERSION,
        message="Service is running",
        status_code=status.HTTP_200_OK,
    )


@router.get(
    "/db",
    response_model=DBHealthResponse,
    summary="Database Health Check",
    responses={
        200: {"description": "Database is reachable"},
        503: {"description": "Database connection failed"},
    },
)
async def database_health_check():
    """Checks connectivity through the database manager, not a request session"""
    start_time = time.time()
    healthy, error = await check_database_health()
    response_time = (time.time() - start_time) * 1000

    if healthy:
        return DBHealthResponse(
            success=True,
            status="connected",
            message="Database is available",
            response_time_ms=response_time,
            status_code=status.HTTP_200_OK,
        )

    logger.error("Database health check failed: {}", error)
    body = DBHealthResponse(
        success=False,
        status="disconnected",
        message="Database is unavailable",
        response_time_ms=response_time,
        error=error,
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=jsonable_encoder(body))
