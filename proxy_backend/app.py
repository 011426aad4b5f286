import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from proxy_backend.api.routes import router as api_router
from proxy_backend.config import get_settings
from proxy_backend.logging_config import configure_logging
from proxy_backend.models.schemas import GenerateResponse
from proxy_backend.services.generation_service import GenerationError

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Video Generation Proxy", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Authorization"],
)

app.include_router(api_router)


def _failure(status_code: int, message: str) -> JSONResponse:
    body = GenerateResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


@app.exception_handler(GenerationError)
async def generation_exception_handler(request: Request, exc: GenerationError):
    logger.warning("Generation failed on %s (%s): %s", request.url.path, exc.status_code, exc)
    return _failure(exc.status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return _failure(400, "Invalid request: prompt is required")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return _failure(500, "Internal server error")


def main() -> None:
    logger.info("Backend running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
