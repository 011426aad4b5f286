from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    # Extra client fields (style, duration, ...) are accepted and dropped.
    model_config = ConfigDict(extra="ignore")

    prompt: str = Field(..., description="Text prompt forwarded to the generation API")


class GenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
