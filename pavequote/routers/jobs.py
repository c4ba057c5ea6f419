"""
Job scoping endpoints — job header, area sections and quote totals.

The area step is a full replace: every submit deletes the job's sections,
inserts the new ones and writes the recomputed totals back onto the job,
all in one commit. Totals are computed before anything is touched, so an
InvalidInput leaves the stored job as it was.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..config import settings
from ..database import get_db
from ..pricing_engine import compute_job_totals
from ..tonnage import InvalidInput
from .tenants import get_tenant_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants/{tenant_id}/jobs", tags=["jobs"])


def generate_job_number(db: Session, tenant_id: str, today: Optional[date] = None) -> str:
    """Next job number for the tenant, format J-YYYYMMDD-NNN (sequence restarts daily)."""
    date_str = (today or datetime.utcnow().date()).strftime("%Y%m%d")
    prefix = f"J-{date_str}-"
    last_job = db.query(models.Job).filter(
        models.Job.tenant_id == tenant_id,
        models.Job.job_number.like(f"{prefix}%"),
    ).order_by(models.Job.job_number.desc()).first()

    sequence = 1
    if last_job:
        sequence = int(last_job.job_number.split("-")[2]) + 1
    return f"{prefix}{str(sequence).zfill(3)}"


def _get_job(tenant_id: str, job_id: int, db: Session) -> models.Job:
    job = db.query(models.Job).filter(
        models.Job.id == job_id,
        models.Job.tenant_id == tenant_id,
    ).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def _check_customer(tenant_id: str, customer_id: Optional[int], db: Session):
    if customer_id is None:
        return
    customer = db.query(models.Customer).filter(
        models.Customer.id == customer_id,
        models.Customer.tenant_id == tenant_id,
    ).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")


def _default_expiry(quote_date: Optional[date], expiry: Optional[date]) -> Optional[date]:
    if quote_date and not expiry:
        return quote_date + timedelta(days=settings.QUOTE_VALID_DAYS)
    return expiry


def recalculate_totals(job: models.Job):
    """
    Reprice the job's stored sections and write totals back (no commit).

    Used when the waste factor changes after sections were saved. Gives the
    same totals as resubmitting the saved sections at the new waste factor.
    """
    totals = compute_job_totals(job.items, job.waste_factor, settings.ASPHALT_DENSITY)
    for item, quote in zip(job.items, totals.sections):
        item.tonnage = quote.tonnage
        item.total_price_ex_gst = quote.total_price_ex_gst
    for field, value in totals.as_job_fields().items():
        setattr(job, field, value)
    return totals


# --- Endpoints ---

@router.post("/", response_model=schemas.Job)
def create_job(tenant_id: str, job: schemas.JobCreate, db: Session = Depends(get_db)):
    get_tenant_or_404(tenant_id, db)
    _check_customer(tenant_id, job.customer_id, db)

    data = job.model_dump()
    data["quote_expiry_date"] = _default_expiry(job.quote_date, job.quote_expiry_date)
    db_job = models.Job(
        tenant_id=tenant_id,
        job_number=generate_job_number(db, tenant_id),
        job_status=models.JobStatus.DRAFT,
        **data,
    )
    db.add(db_job)
    db.commit()
    db.refresh(db_job)
    logger.info("Created job %s (%s) for tenant %s", db_job.id, db_job.job_number, tenant_id)
    return db_job


@router.get("/", response_model=List[schemas.Job])
def list_jobs(tenant_id: str, skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    get_tenant_or_404(tenant_id, db)
    return db.query(models.Job).filter(
        models.Job.tenant_id == tenant_id,
    ).order_by(models.Job.created_at.desc(), models.Job.id.desc()).offset(skip).limit(limit).all()


@router.get("/{job_id}", response_model=schemas.Job)
def get_job(tenant_id: str, job_id: int, db: Session = Depends(get_db)):
    return _get_job(tenant_id, job_id, db)


@router.patch("/{job_id}", response_model=schemas.Job)
def update_job(tenant_id: str, job_id: int, update: schemas.JobUpdate, db: Session = Depends(get_db)):
    job = _get_job(tenant_id, job_id, db)
    changes = update.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(job, field, value)
    if "quote_date" in changes:
        job.quote_expiry_date = _default_expiry(job.quote_date, job.quote_expiry_date)

    if "waste_factor" in changes and job.items:
        # Reprice from the values as stored, not as sent
        db.flush()
        db.refresh(job)
        try:
            recalculate_totals(job)
        except InvalidInput as e:
            db.rollback()
            logger.warning("Job %s repricing failed: %s", job_id, e)
            raise HTTPException(status_code=422, detail=str(e))

    db.commit()
    db.refresh(job)
    return job


@router.put("/{job_id}/areas", response_model=schemas.Job)
def replace_job_areas(tenant_id: str, job_id: int, payload: schemas.JobAreaSubmit,
                      db: Session = Depends(get_db)):
    """Replace all area sections and write the recomputed totals back onto the job."""
    job = _get_job(tenant_id, job_id, db)

    try:
        totals = compute_job_totals(payload.sections, job.waste_factor, settings.ASPHALT_DENSITY)
    except InvalidInput as e:
        logger.warning("Job %s area calculation rejected: %s", job_id, e)
        raise HTTPException(status_code=422, detail=str(e))

    # Delete existing sections first (handles removals)
    job.items.clear()
    db.flush()

    for position, (section, quote) in enumerate(zip(payload.sections, totals.sections)):
        job.items.append(models.JobItem(
            tenant_id=tenant_id,
            position=position,
            name=section.name,
            area_sqm=section.area_sqm,
            depth_mm=section.depth_mm,
            asphalt_mix_type=section.asphalt_mix_type,
            specification=section.specification,
            custom_specification=section.custom_specification or None,
            unit_price_per_tonne=section.unit_price_per_tonne,
            notes=section.notes or None,
            tonnage=quote.tonnage,
            total_price_ex_gst=quote.total_price_ex_gst,
        ))

    for field, value in totals.as_job_fields().items():
        setattr(job, field, value)
    job.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(job)
    logger.info(
        "Job %s areas replaced: %d sections, %s t, $%s ex GST",
        job.id, len(payload.sections), totals.total_tonnage, totals.quote_total_ex_gst,
    )
    return job
