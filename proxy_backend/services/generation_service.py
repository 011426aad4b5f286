import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from proxy_backend.config import Settings
from proxy_backend.models.schemas import GenerateRequest
from proxy_backend.services.upstream_client import build_headers

logger = logging.getLogger(__name__)

# Checked in order; the first key holding a string wins.
RESULT_URL_KEYS = ("url", "output")


class GenerationError(RuntimeError):
    status_code = 500


class ClientInputError(GenerationError):
    status_code = 400


class ServerConfigError(GenerationError):
    status_code = 500


class UpstreamUnreachableError(GenerationError):
    status_code = 502


class UpstreamError(GenerationError):
    status_code = 502


class ResponseParseError(GenerationError):
    status_code = 500


class VideoUrlNotFoundError(ResponseParseError):
    pass


def generate_video(request: GenerateRequest, settings: Settings, http_client: httpx.Client) -> str:
    validate_prompt(request.prompt, settings.prompt_char_limit)
    api_key, api_url = _require_upstream_config(settings)
    payload = build_upstream_payload(request.prompt)

    logger.info("Forwarding generation request (%d chars) to %s", len(request.prompt), api_url)
    try:
        response = http_client.post(api_url, json=payload, headers=build_headers(api_key))
    except httpx.HTTPError as exc:
        logger.exception("Failed to contact AI provider at %s", api_url)
        raise UpstreamUnreachableError("Failed to contact AI provider") from exc

    if response.status_code != 200:
        logger.error("Upstream error %s: %s", response.status_code, response.text)
        raise UpstreamError(f"AI Provider returned error: {response.status_code}")

    video_url = extract_video_url(response.content)
    logger.info("Generation completed, video at %s", video_url)
    return video_url


def validate_prompt(prompt: Optional[str], char_limit: Optional[int] = None) -> None:
    """Reject blank prompts, and overlong ones when a limit is configured.

    Only the check trims; the prompt is forwarded exactly as received.
    """
    trimmed = (prompt or "").strip()
    if not trimmed:
        raise ClientInputError("Invalid request: prompt is required")
    if char_limit is not None and len(trimmed) > char_limit:
        raise ClientInputError(f"Prompt too long. Maximum {char_limit} characters.")


def _require_upstream_config(settings: Settings) -> Tuple[str, str]:
    if not settings.ai_api_key or not settings.ai_api_url:
        logger.error("AI_API_KEY or AI_API_URL is not configured")
        raise ServerConfigError("Server configuration error: API Key or URL missing")

    try:
        url = httpx.URL(settings.ai_api_url)
    except httpx.InvalidURL as exc:
        logger.error("AI_API_URL is not a valid URL: %s", settings.ai_api_url)
        raise ServerConfigError("Server configuration error: API URL is invalid") from exc
    if url.scheme not in ("http", "https") or not url.host:
        logger.error("AI_API_URL is not an absolute http(s) URL: %s", settings.ai_api_url)
        raise ServerConfigError("Server configuration error: API URL is invalid")

    return settings.ai_api_key, settings.ai_api_url


def build_upstream_payload(prompt: str) -> Dict[str, Any]:
    return {"prompt": prompt}


def extract_video_url(body: bytes) -> str:
    """Pull the result URL out of a raw upstream reply.

    The body must be a JSON object. ``url`` is preferred over ``output``; a
    key whose value is not a string is treated as absent.
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        logger.error("Upstream reply is not valid JSON: %r", body[:200])
        raise ResponseParseError("Failed to parse AI response") from exc

    if not isinstance(data, dict):
        logger.error("Upstream reply is not a JSON object: %s", type(data).__name__)
        raise ResponseParseError("Failed to parse AI response")

    for key in RESULT_URL_KEYS:
        value = data.get(key)
        if isinstance(value, str):
            return value

    logger.error("No video URL in upstream reply, keys: %s", sorted(data))
    raise VideoUrlNotFoundError("Video URL not found in response")
