import uvicorn
from fastapi import FastAPI

from webpage_info.core.config import settings
from webpage_info.exceptions.handlers import register_exception_handlers
from webpage_info.routers import router
from webpage_info.version import __version__

# Initialize FastAPI application
app = FastAPI(
    title="webpage-info",
    description="Extract metadata from web pages",
    version=__version__
)

register_exception_handlers(app)

# Include the centralized router
app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "webpage-info is running"}


def run() -> None:
    from webpage_info.config.logging_config import setup_logging

    setup_logging()
    uvicorn.run(
        "webpage_info.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.is_development
    )


if __name__ == "__main__":
    run()
