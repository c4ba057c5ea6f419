from fastapi import APIRouter

from .. import schemas
from ..abn import abn_for_storage, format_abn, is_valid_abn

router = APIRouter(prefix="/abn", tags=["abn"])


@router.post("/validate", response_model=schemas.AbnCheckResult)
def validate_abn(req: schemas.AbnCheck):
    """Checksum an ABN for inline form feedback. Always 200; validity is in the body."""
    return {
        "abn": req.abn,
        "valid": is_valid_abn(req.abn),
        "formatted": format_abn(req.abn),
        "digits": abn_for_storage(req.abn),
    }
