from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db
from .tenants import get_tenant_or_404

router = APIRouter(prefix="/tenants/{tenant_id}/customers", tags=["customers"])


def _get_customer(tenant_id: str, customer_id: int, db: Session) -> models.Customer:
    customer = db.query(models.Customer).filter(
        models.Customer.id == customer_id,
        models.Customer.tenant_id == tenant_id,
    ).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer

@router.post("/", response_model=schemas.Customer)
def create_customer(tenant_id: str, customer: schemas.CustomerCreate, db: Session = Depends(get_db)):
    get_tenant_or_404(tenant_id, db)
    db_customer = models.Customer(tenant_id=tenant_id, **customer.model_dump())
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer

@router.get("/", response_model=List[schemas.Customer])
def list_customers(tenant_id: str, include_inactive: bool = False, skip: int = 0, limit: int = 100,
                   db: Session = Depends(get_db)):
    get_tenant_or_404(tenant_id, db)
    query = db.query(models.Customer).filter(models.Customer.tenant_id == tenant_id)
    if not include_inactive:
        query = query.filter(models.Customer.is_active.is_(True))
    return query.order_by(models.Customer.business_name).offset(skip).limit(limit).all()

@router.get("/{customer_id}", response_model=schemas.Customer)
def get_customer(tenant_id: str, customer_id: int, db: Session = Depends(get_db)):
    return _get_customer(tenant_id, customer_id, db)

@router.patch("/{customer_id}", response_model=schemas.Customer)
def update_customer(tenant_id: str, customer_id: int, update: schemas.CustomerUpdate,
                    db: Session = Depends(get_db)):
    customer = _get_customer(tenant_id, customer_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    db.commit()
    db.refresh(customer)
    return customer
