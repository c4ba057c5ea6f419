from sqlalchemy import Column, Integer, String, Numeric, DateTime, Date, Text, ForeignKey, Enum, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from datetime import datetime
from decimal import Decimal
from .database import Base
import enum


# --- Enums ---

class AsphaltMixType(str, enum.Enum):
    AC10 = "ac10"                # 10mm wearing course
    AC14 = "ac14"                # 14mm intermediate course
    AC20 = "ac20"                # 20mm base course
    SMA = "sma"                  # Stone mastic asphalt
    OPEN_GRADED = "open_graded"  # Porous
    WARM_MIX = "warm_mix"
    COLD_MIX = "cold_mix"        # Temporary repairs
    RECYCLED = "recycled"        # RAP
    CUSTOM = "custom"


class SpecificationStandard(str, enum.Enum):
    RMS_R116 = "rms_r116"
    RMS_R117 = "rms_r117"
    RMS_R118 = "rms_r118"
    VICROADS_407 = "vicroads_section_407"
    VICROADS_408 = "vicroads_section_408"
    MRWA_504 = "mrwa_specification_504"
    TMR_MRTS30 = "tmr_mrts30"
    DPTI_228 = "dpti_part_228"
    LOCAL_COUNCIL = "local_council"
    CUSTOM = "custom"


class JobType(str, enum.Enum):
    MILL_AND_FILL = "mill_and_fill"
    RESHEET = "resheet"
    OVERLAY = "overlay"
    PATCHING = "patching"
    FULL_RECONSTRUCTION = "full_reconstruction"


class JobStatus(str, enum.Enum):
    DRAFT = "draft"
    QUOTED = "quoted"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    INVOICED = "invoiced"
    CANCELLED = "cancelled"


# Scale of each user-entered quantity. The request schemas reject anything
# finer, so stored inputs are exactly what was priced.
AREA_PLACES = 2
DEPTH_PLACES = 1
PRICE_PLACES = 2
WASTE_PLACES = 2


class Quantity(TypeDecorator):
    """
    Derived quantity (tonnage, totals) stored as decimal text.

    Numeric would round to a fixed scale, and on SQLite pass through float.
    Text keeps the computed Decimal exact; rounding happens at display time only.
    """
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(value if isinstance(value, Decimal) else Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


# --- Tables ---

class Tenant(Base):
    """A contracting business. ABN must pass the checksum before a row is written."""
    __tablename__ = "tenants"

    id = Column(String, primary_key=True)  # UUID
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    abn = Column(String, unique=True, nullable=False)  # Display format 'XX XXX XXX XXX'
    acn = Column(String, nullable=True)
    gst_registered = Column(Boolean, default=True)
    address_line1 = Column(String, nullable=False)
    address_line2 = Column(String, nullable=True)
    suburb = Column(String, nullable=False)
    state = Column(String, nullable=False)
    postcode = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    website = Column(String, nullable=True)
    active = Column(Boolean, default=True)
    subscription_tier = Column(String, default="basic")
    subscription_status = Column(String, default="trial")
    trial_ends_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customers = relationship("Customer", back_populates="tenant", cascade="all, delete-orphan")
    jobs = relationship("Job", back_populates="tenant", cascade="all, delete-orphan")


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False, index=True)
    business_name = Column(String, nullable=False)
    trading_name = Column(String)
    abn = Column(String)
    acn = Column(String)
    address_line1 = Column(String)
    address_line2 = Column(String)
    suburb = Column(String)
    state = Column(String)
    postcode = Column(String)
    notes = Column(Text)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant = relationship("Tenant", back_populates="customers")
    jobs = relationship("Job", back_populates="customer")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    job_number = Column(String, nullable=False)  # J-YYYYMMDD-NNN, unique per tenant
    job_type = Column(Enum(JobType), nullable=False)
    job_status = Column(Enum(JobStatus), default=JobStatus.DRAFT)
    title = Column(String, nullable=False)
    description = Column(Text)
    waste_factor = Column(Numeric(5, WASTE_PLACES, asdecimal=True), default=5)
    # Quote details
    quote_number = Column(String, nullable=True)
    quote_date = Column(Date, nullable=True)
    quote_expiry_date = Column(Date, nullable=True)
    # Totals — written back by the pricing engine
    site_area_sqm = Column(Quantity(), nullable=True)
    total_tonnage = Column(Quantity(), nullable=True)
    quote_total_ex_gst = Column(Quantity(), nullable=True)
    quote_gst_amount = Column(Quantity(), nullable=True)
    quote_total_inc_gst = Column(Quantity(), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant = relationship("Tenant", back_populates="jobs")
    customer = relationship("Customer", back_populates="jobs")
    items = relationship(
        "JobItem", back_populates="job", cascade="all, delete-orphan",
        order_by="JobItem.position",
    )


class JobItem(Base):
    """One area section. Replaced wholesale every time the job-area step is submitted."""
    __tablename__ = "job_items"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    position = Column(Integer, default=0)  # Display order only
    name = Column(String, nullable=False)
    area_sqm = Column(Numeric(12, AREA_PLACES, asdecimal=True), nullable=False)
    depth_mm = Column(Numeric(8, DEPTH_PLACES, asdecimal=True), nullable=False)
    asphalt_mix_type = Column(Enum(AsphaltMixType), nullable=False)
    specification = Column(Enum(SpecificationStandard), nullable=True)
    custom_specification = Column(String, nullable=True)
    unit_price_per_tonne = Column(Numeric(12, PRICE_PLACES, asdecimal=True), nullable=True)
    # Derived
    tonnage = Column(Quantity(), nullable=True)
    total_price_ex_gst = Column(Quantity(), nullable=True)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    job = relationship("Job", back_populates="items")
