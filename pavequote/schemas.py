from pydantic import BaseModel, Field, PlainSerializer, computed_field, field_validator, model_validator
from typing import Annotated, Optional, List
from datetime import datetime, date
from decimal import Decimal
from .abn import is_valid_abn, format_abn
from .config import settings
from .formatting import format_mix_type, format_specification
from .models import AsphaltMixType, SpecificationStandard, JobType, JobStatus
from .models import AREA_PLACES, DEPTH_PLACES, PRICE_PLACES, WASTE_PLACES

# Decimals go out as JSON numbers, not strings
Number = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _check_abn(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    if not is_valid_abn(value):
        raise ValueError("Invalid ABN format or checksum")
    return format_abn(value)


# --- Tenants ---

class TenantCreate(BaseModel):
    name: str = Field(min_length=1)
    abn: str  # checksum enforced by the registration endpoint (400, not 422)
    acn: Optional[str] = None
    gst_registered: bool = True
    address_line1: str
    address_line2: Optional[str] = None
    suburb: str
    state: str
    postcode: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class Tenant(BaseModel):
    id: str
    name: str
    slug: str
    abn: str
    acn: Optional[str] = None
    gst_registered: bool
    address_line1: str
    address_line2: Optional[str] = None
    suburb: str
    state: str
    postcode: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    active: bool
    subscription_tier: str
    subscription_status: str
    trial_ends_at: Optional[datetime] = None
    created_at: datetime
    class Config:
        from_attributes = True


# --- Customers ---

class CustomerBase(BaseModel):
    business_name: str = Field(min_length=1)
    trading_name: Optional[str] = None
    abn: Optional[str] = None
    acn: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    suburb: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("abn")
    @classmethod
    def abn_checksum(cls, v):
        return _check_abn(v)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    business_name: Optional[str] = Field(default=None, min_length=1)
    trading_name: Optional[str] = None
    abn: Optional[str] = None
    acn: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    suburb: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("abn")
    @classmethod
    def abn_checksum(cls, v):
        return _check_abn(v)


class Customer(CustomerBase):
    id: int
    tenant_id: str
    is_active: bool
    created_at: datetime
    class Config:
        from_attributes = True


# --- Area sections ---

class AreaSectionCreate(BaseModel):
    name: str = Field(min_length=1)
    area_sqm: Decimal = Field(gt=0, decimal_places=AREA_PLACES)
    depth_mm: Decimal = Field(ge=1, decimal_places=DEPTH_PLACES)
    asphalt_mix_type: AsphaltMixType = AsphaltMixType.AC14
    specification: SpecificationStandard = SpecificationStandard.LOCAL_COUNCIL
    custom_specification: Optional[str] = None
    unit_price_per_tonne: Optional[Decimal] = Field(default=None, ge=0, decimal_places=PRICE_PLACES)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def custom_specification_required(self):
        if self.specification == SpecificationStandard.CUSTOM:
            if not (self.custom_specification or "").strip():
                raise ValueError("custom_specification is required when specification is 'custom'")
        return self


class JobAreaSubmit(BaseModel):
    """Full replacement of a job's area sections."""
    sections: List[AreaSectionCreate] = Field(min_length=1)


class JobItem(BaseModel):
    id: int
    position: int
    name: str
    area_sqm: Number
    depth_mm: Number
    asphalt_mix_type: AsphaltMixType
    specification: Optional[SpecificationStandard] = None
    custom_specification: Optional[str] = None
    unit_price_per_tonne: Optional[Number] = None
    tonnage: Optional[Number] = None
    total_price_ex_gst: Optional[Number] = None
    notes: Optional[str] = None
    class Config:
        from_attributes = True

    @computed_field
    @property
    def mix_label(self) -> str:
        return format_mix_type(self.asphalt_mix_type)

    @computed_field
    @property
    def specification_label(self) -> Optional[str]:
        if self.specification is None:
            return None
        return format_specification(self.specification, self.custom_specification)


# --- Jobs ---

class JobCreate(BaseModel):
    job_type: JobType
    title: str = Field(min_length=1)
    description: Optional[str] = None
    customer_id: Optional[int] = None
    waste_factor: Decimal = Field(
        default=Decimal(str(settings.DEFAULT_WASTE_FACTOR_PCT)),
        ge=0,
        le=Decimal(str(settings.MAX_WASTE_FACTOR_PCT)),
        decimal_places=WASTE_PLACES,
    )
    quote_number: Optional[str] = None
    quote_date: Optional[date] = None
    quote_expiry_date: Optional[date] = None


class JobUpdate(BaseModel):
    job_status: Optional[JobStatus] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    waste_factor: Optional[Decimal] = Field(
        default=None, ge=0, le=Decimal(str(settings.MAX_WASTE_FACTOR_PCT)),
        decimal_places=WASTE_PLACES,
    )
    quote_number: Optional[str] = None
    quote_date: Optional[date] = None
    quote_expiry_date: Optional[date] = None


class Job(BaseModel):
    id: int
    tenant_id: str
    customer_id: Optional[int] = None
    job_number: str
    job_type: JobType
    job_status: JobStatus
    title: str
    description: Optional[str] = None
    waste_factor: Number
    quote_number: Optional[str] = None
    quote_date: Optional[date] = None
    quote_expiry_date: Optional[date] = None
    site_area_sqm: Optional[Number] = None
    total_tonnage: Optional[Number] = None
    quote_total_ex_gst: Optional[Number] = None
    quote_gst_amount: Optional[Number] = None
    quote_total_inc_gst: Optional[Number] = None
    created_at: datetime
    updated_at: datetime
    items: List[JobItem] = []
    class Config:
        from_attributes = True


# --- Calculation previews ---

class TonnageRequest(BaseModel):
    # No bounds here: range checks belong to the calculator (InvalidInput → 422)
    area_sqm: Decimal
    depth_mm: Decimal
    waste_factor_pct: Decimal = Decimal(str(settings.DEFAULT_WASTE_FACTOR_PCT))
    density: Optional[Decimal] = None


class TonnageResult(BaseModel):
    tonnage: Number
    display: str


class JobTotalsRequest(BaseModel):
    sections: List[AreaSectionCreate] = []
    waste_factor_pct: Decimal = Decimal(str(settings.DEFAULT_WASTE_FACTOR_PCT))


class SectionQuote(BaseModel):
    name: str
    area_sqm: Number
    tonnage: Number
    total_price_ex_gst: Number
    class Config:
        from_attributes = True


class JobTotals(BaseModel):
    site_area_sqm: Number
    total_tonnage: Number
    quote_total_ex_gst: Number
    quote_gst_amount: Number
    quote_total_inc_gst: Number
    sections: List[SectionQuote] = []
    display: dict = {}


class AbnCheck(BaseModel):
    abn: str


class AbnCheckResult(BaseModel):
    abn: str
    valid: bool
    formatted: str
    digits: str
