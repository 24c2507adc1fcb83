from webpage_info.services.container import container
from webpage_info.services.webpage_service import WebpageInfoService


def get_webpage_service() -> WebpageInfoService:
    """FastAPI dependency returning the shared webpage info service"""
    return container.get_webpage_service()
