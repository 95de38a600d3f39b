"""Admin API endpoints for solution quality tooling."""
from fastapi import APIRouter, Header, HTTPException

from wwfm.config import get_settings
from wwfm.schemas.specificity import ValidationReport, ValidationRequest
from wwfm.services.cache import cache
from wwfm.services.filter_rules import DEFAULT_RULES
from wwfm.services.specificity import validate_solutions, run_validation_examples

router = APIRouter(prefix="/admin", tags=["admin"])

MAX_BATCH_SIZE = 500


def _verify_admin_key(x_admin_key: str):
    admin_key = get_settings().admin_api_key
    if not admin_key or x_admin_key != admin_key:
        raise HTTPException(status_code=403, detail="Invalid admin key")


@router.post("/validate-solutions", response_model=ValidationReport)
def validate_solution_batch(
    payload: ValidationRequest,
    x_admin_key: str = Header(..., description="Admin API key"),
):
    """Batch-check proposed solution names (admin only)."""
    _verify_admin_key(x_admin_key)

    if len(payload.names) > MAX_BATCH_SIZE:
        raise HTTPException(status_code=422, detail=f"At most {MAX_BATCH_SIZE} names per batch")

    return validate_solutions(payload.names)


@router.get("/validation-examples")
def validation_examples(x_admin_key: str = Header(..., description="Admin API key")):
    """Run the validator against the curated good/bad examples (admin only)."""
    _verify_admin_key(x_admin_key)
    return {"rules_version": DEFAULT_RULES.version, **run_validation_examples()}


@router.delete("/cache")
async def clear_detection_cache(x_admin_key: str = Header(..., description="Admin API key")):
    """Drop cached detection results, e.g. after the rule tables change (admin only)."""
    _verify_admin_key(x_admin_key)
    await cache.invalidate_detections()
    return {"status": "success", "cache_connected": cache.is_connected}
