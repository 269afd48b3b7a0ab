from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from dottie.api.routes import health_router, hello_router, user_router
from dottie.config import API_PREFIX, DEBUG, ENVIRONMENT, HOST, PORT, VERSION
from dottie.database import close_db, init_db
from dottie.middleware.cors import setup_cors
from dottie.utils.exception_handling import register_exception_handlers
from dottie.utils.logging_config import setup_logging
from dottie.utils.logging_request import log_requests_middleware

# --- Setup logging ---
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Dottie API...")
    logger.info("Environment: {}", ENVIRONMENT)
    logger.info("Version: {}", VERSION)

    try:
        await init_db()
        logger.success("Database initialized successfully")
    except Exception as e:
        logger.critical("Failed to initialize database: {}", e)
        raise

    yield

    # Shutdown
    logger.info("Shutting down Dottie API...")
    try:
        await close_db()
    except Exception as e:
        logger.error("Error closing database connection: {}", e)


app = FastAPI(
    title="Dottie API",
    description="Backend API for the Dottie app",
    version=VERSION,
    debug=DEBUG,
    lifespan=lifespan,
)

# --- Setup CORS ---
setup_cors(app)

# --- Include routers ---
app.include_router(hello_router)
app.include_router(health_router)
app.include_router(user_router, prefix=API_PREFIX)

# --- Add middleware ---
app.middleware("http")(log_requests_middleware)

# --- Add exception handlers ---
register_exception_handlers(app)


def run():
    import uvicorn

    logger.info("Starting Uvicorn server...")

    uvicorn.run(
        "dottie.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="error",
        access_log=False,
    )


if __name__ == "__main__":
    run()
