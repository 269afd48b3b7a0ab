from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from dottie.config import ALLOWED_METHODS, ALLOWED_ORIGINS


def setup_cors(app: FastAPI):
    """Allow the Dottie web clients to call the API from the browser"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Process-Time"],
    )
    logger.debug("CORS enabled for {} origin(s), methods: {}", len(ALLOWED_ORIGINS), ", ".join(ALLOWED_METHODS))
