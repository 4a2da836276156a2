from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chalet.models import ReservationStatus
from chalet.utils.validators import validate_name


class QuoteRequest(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: int = 2
    pets: int = 0


class QuoteOut(BaseModel):
    nights: int
    base_total: Decimal
    extra_total: Decimal
    total: Decimal


class QuoteResponse(BaseModel):
    # None while the stay is incomplete
    quote: Optional[QuoteOut] = None


class PricingOut(BaseModel):
    base_price: Decimal
    base_guests: int
    extra_person_fee: Decimal
    max_guests: int
    max_pets: int


class AvailabilityOut(BaseModel):
    check_in: date
    check_out: date
    available: bool


class ReservationCreate(BaseModel):
    user_id: str = Field(min_length=1)
    user_name: str
    check_in: date
    check_out: date
    guests: int = 2
    pets: int = 0
    status: ReservationStatus = ReservationStatus.PENDING
    payment_method: Optional[str] = None

    @field_validator("user_name")
    @classmethod
    def check_user_name(cls, v: str):
        if not validate_name(v):
            raise ValueError("name must be between 2 and 100 characters")
        return v


class ReservationUpdate(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: Optional[int] = None
    pets: Optional[int] = None
    total_price: Optional[Decimal] = None
    payment_method: Optional[str] = None
    status: Optional[ReservationStatus] = None


class ReservationOut(BaseModel):
    id: int
    user_id: str
    user_name: str
    check_in: date
    check_out: date
    guests: int
    pets: int
    total_price: Decimal
    status: ReservationStatus
    payment_method: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SiteSettingIn(BaseModel):
    value: str


class SiteSettingOut(BaseModel):
    key: str
    value: Optional[str] = None
