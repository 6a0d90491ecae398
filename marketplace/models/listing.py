"""Listing models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UnitType(str, Enum):
    """Unit types offered on the submission form."""
    GARAGE = "Garage"
    WAREHOUSE = "Warehouse"
    DRIVEWAY = "Driveway"
    BOAT_STORAGE = "Boat Storage"
    RV_STORAGE = "RV Storage"
    OTHER = "Other"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]


class Listing(BaseModel):
    """Storage unit listing as stored in the listings table."""
    id: str = Field(..., description="Listing ID assigned by the database")
    title: str = Field(..., description="Listing title")
    description: str = Field(..., description="Free-text description")
    location_city: str = Field(..., description="City")
    location_zip: str = Field(..., description="Zip code")
    price_per_month: float = Field(..., ge=0, description="Monthly price in dollars")
    unit_type: str = Field(..., description="Unit type label")
    size_sq_ft: int = Field(..., ge=0, description="Size in square feet")
    image_url: Optional[str] = Field(None, description="Public image URL, null means category default")
    is_available: bool = Field(default=True, description="Whether the unit is listed as available")
    contact_email: str = Field(..., description="Lister contact email")
    created_at: Optional[str] = None


class ListingDraft(BaseModel):
    """Listing ready for insert: no id or created_at, always available."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location_city: str = Field(..., min_length=1)
    location_zip: str = Field(..., min_length=1)
    price_per_month: float = Field(..., ge=0, allow_inf_nan=False)
    unit_type: UnitType
    size_sq_ft: int = Field(..., ge=0)
    image_url: Optional[str] = None
    is_available: bool = True
    contact_email: EmailStr

    def to_record(self) -> dict:
        """Row payload for the listings table."""
        record = self.model_dump(mode="json")
        record["is_available"] = True
        return record
