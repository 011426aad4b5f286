import logging

import httpx
from fastapi import APIRouter, Depends

from proxy_backend.config import Settings, get_settings
from proxy_backend.models.schemas import GenerateRequest, GenerateResponse, HealthResponse
from proxy_backend.services import generation_service
from proxy_backend.services.upstream_client import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True)
def generate(
    payload: GenerateRequest,
    settings: Settings = Depends(get_settings),
    http_client: httpx.Client = Depends(get_http_client),
):
    video_url = generation_service.generate_video(payload, settings, http_client)
    return GenerateResponse(success=True, video_url=video_url)


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(status="ok")
