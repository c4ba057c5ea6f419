"""
Tenant registration — the ABN checksum gates account creation.

POST /api/tenants/ → 400 on a bad ABN, 409 if the ABN is already registered.
"""

import logging
import uuid
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..abn import format_abn, is_valid_abn
from ..config import settings
from ..database import get_db
from ..formatting import slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["tenants"])


def get_tenant_or_404(tenant_id: str, db: Session) -> models.Tenant:
    tenant = db.query(models.Tenant).filter(models.Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


@router.post("/", response_model=schemas.Tenant)
def register_tenant(tenant: schemas.TenantCreate, db: Session = Depends(get_db)):
    if not is_valid_abn(tenant.abn):
        logger.warning("Registration rejected for %r: invalid ABN %r", tenant.name, tenant.abn)
        raise HTTPException(status_code=400, detail="Invalid ABN format or checksum")

    formatted_abn = format_abn(tenant.abn)
    existing = db.query(models.Tenant).filter(models.Tenant.abn == formatted_abn).first()
    if existing:
        logger.warning("Registration rejected for %r: ABN %s already registered", tenant.name, formatted_abn)
        raise HTTPException(status_code=409, detail="An account with this ABN already exists")

    tenant_id = str(uuid.uuid4())
    db_tenant = models.Tenant(
        id=tenant_id,
        slug=f"{slugify(tenant.name)}-{tenant_id[:8]}",
        subscription_tier="basic",
        subscription_status="trial",
        trial_ends_at=datetime.utcnow() + timedelta(days=settings.TRIAL_DAYS),
        **tenant.model_dump(exclude={"abn"}),
        abn=formatted_abn,
    )
    db.add(db_tenant)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same ABN
        db.rollback()
        raise HTTPException(status_code=409, detail="An account with this ABN already exists")
    db.refresh(db_tenant)
    logger.info("Registered tenant %s (%s, ABN %s)", db_tenant.id, db_tenant.name, db_tenant.abn)
    return db_tenant


@router.get("/{tenant_id}", response_model=schemas.Tenant)
def get_tenant(tenant_id: str, db: Session = Depends(get_db)):
    return get_tenant_or_404(tenant_id, db)
