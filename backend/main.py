from fastapi import FastAPI

from config import Settings
from routes.webhook import router as webhook_router

def create_app(settings: Settings) -> FastAPI:
    """Build the webhook app around an already validated Settings object"""
    app = FastAPI(
        title="Greenhorn Deploy",
        description="Pulls a git working copy when GitHub reports a push to the watched branch",
        version="1.0.0"
    )

    # Shared read-only by every request
    app.state.settings = settings

    app.include_router(webhook_router, tags=["webhook"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
