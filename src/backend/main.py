"""
Main FastAPI application entry point.
"""

from app import create_app

# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    from core.config import settings
    from core.uvicorn_logging import LOGGING_CONFIG

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.api.debug,
        log_level="info",
        log_config=LOGGING_CONFIG,
        access_log=True,
        timeout_graceful_shutdown=10,
        server_header=False,
        timeout_keep_alive=5,
    )
