"""FastAPI application factory."""

from fastapi import FastAPI

from encodewatch.api.middleware import encodewatch_error_handler
from encodewatch.api.routes import encode, status
from encodewatch.models.errors import EncodeWatchError


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="EncodeWatch",
        description="Progress tracking for command-line video encodes",
        version="0.1.0",
    )

    # Error handlers
    app.add_exception_handler(EncodeWatchError, encodewatch_error_handler)

    # Routes
    app.include_router(encode.router)
    app.include_router(status.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": "0.1.0"}

    return app


app = create_app()
