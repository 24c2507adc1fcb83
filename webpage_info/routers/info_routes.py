from fastapi import APIRouter, Depends, Query

from webpage_info.config.logging_config import get_logger
from webpage_info.dependencies.webpage_deps import get_webpage_service
from webpage_info.models.request_models import ParseRequest
from webpage_info.services.webpage_service import WebpageInfoService

logger = get_logger(__name__)

router = APIRouter()


@router.get("/info")
async def get_webpage_info(
    url: str = Query(...),
    service: WebpageInfoService = Depends(get_webpage_service)
):
    logger.info(f"Received request for webpage info: {url}")
    return await service.get_webpage_info(url)


@router.post("/parse")
async def parse_html(
    request: ParseRequest,
    service: WebpageInfoService = Depends(get_webpage_service)
):
    return service.parse_html(request.html, request.base_url)
