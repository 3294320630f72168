"""Content analysis JSON API route."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..dependencies import get_resolver
from ..rate_limit import limiter
from ..timeutil import utc_timestamp
from .schemas import MIN_CONTENT_LENGTH, AnalyzeContentRequest, AnalyzeContentResponse
from .service import ErrorKind, SuggestionError, SuggestionResolver

logger = logging.getLogger(__name__)

CONTENT_REQUIRED_ERROR = f"Content is required and must be at least {MIN_CONTENT_LENGTH} characters long"

_ERROR_RESPONSES = {
    ErrorKind.CONFIGURATION: (500, "Service configuration error"),
    ErrorKind.RATE_LIMITED: (429, "Service temporarily busy, please try again"),
    ErrorKind.UNAVAILABLE: (500, "Analysis temporarily unavailable"),
}

router = APIRouter(tags=["suggestions"])


@router.post("/analyze-content")
@limiter.limit(settings.rate_limit_api)
def analyze_content(
    request: Request,
    body: AnalyzeContentRequest,
    resolver: SuggestionResolver = Depends(get_resolver),
):
    """Return 1-2 LinkedIn suggestions for a post."""
    content = body.content
    if not content or len(content) < MIN_CONTENT_LENGTH:
        return JSONResponse({"error": CONTENT_REQUIRED_ERROR}, status_code=400)

    logger.info("Analyzing content (%d chars): %s", len(content), content[:100])

    try:
        suggestions = resolver.resolve(content)
    except SuggestionError as exc:
        logger.error("Analysis error (%s): %s", exc.kind.value, exc.detail)
        status_code, message = _ERROR_RESPONSES[exc.kind]
        return JSONResponse({"error": message}, status_code=status_code)
    except Exception:
        logger.exception("Analysis error")
        return JSONResponse({"error": "Analysis temporarily unavailable"}, status_code=500)

    response = AnalyzeContentResponse(
        suggestions=suggestions,
        timestamp=utc_timestamp(),
        content_length=len(content),
    )
    return JSONResponse(response.model_dump(by_alias=True))
