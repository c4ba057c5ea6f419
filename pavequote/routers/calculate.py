"""
Stateless calculation previews — nothing is persisted.

Used by the job-area form to show running totals while the user edits
sections, before the step is submitted.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from .. import schemas
from ..config import settings
from ..formatting import format_currency, format_tonnage
from ..pricing_engine import JobTotals, compute_job_totals
from ..tonnage import InvalidInput, compute_tonnage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculate", tags=["calculate"])


def totals_to_dict(totals: JobTotals) -> dict:
    """JobTotals plus pre-formatted display strings (rounded here, never before)."""
    data = asdict(totals)
    data["sections"] = list(data["sections"])
    data["display"] = {
        "site_area_sqm": f"{totals.site_area_sqm:,.2f} m²",
        "total_tonnage": format_tonnage(totals.total_tonnage),
        "quote_total_ex_gst": format_currency(totals.quote_total_ex_gst),
        "quote_gst_amount": format_currency(totals.quote_gst_amount),
        "quote_total_inc_gst": format_currency(totals.quote_total_inc_gst),
    }
    return data


@router.post("/tonnage", response_model=schemas.TonnageResult)
def calculate_tonnage(req: schemas.TonnageRequest):
    density = req.density if req.density is not None else settings.ASPHALT_DENSITY
    try:
        tonnage = compute_tonnage(req.area_sqm, req.depth_mm, req.waste_factor_pct, density)
    except InvalidInput as e:
        logger.warning("Tonnage preview rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    return {"tonnage": tonnage, "display": format_tonnage(tonnage)}


@router.post("/job-totals", response_model=schemas.JobTotals)
def calculate_job_totals(req: schemas.JobTotalsRequest):
    try:
        totals = compute_job_totals(req.sections, req.waste_factor_pct, settings.ASPHALT_DENSITY)
    except InvalidInput as e:
        logger.warning("Job totals preview rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    return totals_to_dict(totals)
