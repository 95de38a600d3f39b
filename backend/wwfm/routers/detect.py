"""
Detection Router - classify "a thing that helped".

Caching and debouncing are handled here and in the client; the detection
service itself is stateless.
"""
from fastapi import APIRouter, Depends, Query, Request

from wwfm.schemas.detection import DetectionResult
from wwfm.schemas.specificity import SpecificityCheck, SpecificityRequest
from wwfm.services.cache import cache
from wwfm.services.detection import DetectionService
from wwfm.services.solution_filter import normalize_text
from wwfm.services.specificity import check_specificity

router = APIRouter(tags=["detection"])


def get_detection_service(request: Request) -> DetectionService:
    """Dependency returning the service created at startup."""
    return request.app.state.detection_service


@router.get("/detect", response_model=DetectionResult)
async def detect(
    q: str = Query("", max_length=200, description="Free-text solution name"),
    service: DetectionService = Depends(get_detection_service),
):
    """Match input against known solutions, categories and keywords."""
    search_term = normalize_text(q)
    if not search_term:
        return DetectionResult(search_term=q)

    cached_result = await cache.get_detection(search_term)
    if cached_result is not None:
        result = DetectionResult.model_validate(cached_result)
        # Cache is keyed by the normalized term; echo this request's text
        result.search_term = q
        return result

    result = await service.detect_from_input(q)
    # A degraded result is only a fallback for this request
    if not result.degraded:
        await cache.set_detection(search_term, result.model_dump(mode="json"))
    return result


@router.post("/specificity", response_model=SpecificityCheck)
def specificity(payload: SpecificityRequest):
    """Check whether a proposed solution name is specific enough to accept."""
    return check_specificity(payload.name)
