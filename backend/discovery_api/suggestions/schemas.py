"""Suggestion request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field

MIN_CONTENT_LENGTH = 10


class Suggestion(BaseModel):
    title: str
    description: str


class AnalyzeContentRequest(BaseModel):
    content: str | None = None


class AnalyzeContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggestions: list[Suggestion] = Field(default_factory=list)
    timestamp: str
    content_length: int = Field(alias="contentLength")
