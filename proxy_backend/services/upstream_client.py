import logging
from typing import Dict, Iterator, Optional

import httpx
from fastapi import Depends

from proxy_backend.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def create_http_client(settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Build the client used for one outbound generation call.

    The configured timeout bounds connect, read and write alike, so a stalled
    provider surfaces as a transport error instead of hanging the worker.
    """
    return httpx.Client(timeout=httpx.Timeout(settings.ai_api_timeout), transport=transport)


def get_http_client(settings: Settings = Depends(get_settings)) -> Iterator[httpx.Client]:
    client = create_http_client(settings)
    try:
        yield client
    finally:
        client.close()
