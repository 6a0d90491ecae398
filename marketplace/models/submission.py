"""Submission form models - the input layer in front of the submission flow."""

import base64
import binascii
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from marketplace.models.listing import ListingDraft, UnitType
from marketplace.utils.errors import ImageValidationError


class ListingForm(BaseModel):
    """
    Raw listing form as submitted by a lister.

    Every field is required and non-empty. Price and size arrive as strings
    from the form and are coerced here, so the flow itself never re-validates.
    """
    title: str = Field(..., min_length=1, description="e.g. Large Garage Space")
    description: str = Field(..., min_length=1)
    location_city: str = Field(..., min_length=1)
    location_zip: str = Field(..., min_length=1)
    price_per_month: float = Field(..., ge=0, allow_inf_nan=False, description="Dollars per month")
    unit_type: UnitType
    size_sq_ft: int = Field(..., ge=0, description="Square feet")
    contact_email: EmailStr

    @field_validator(
        "title", "description", "location_city", "location_zip",
        mode="before",
    )
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("price_per_month", "size_sq_ft", "unit_type", "contact_email", mode="before")
    @classmethod
    def reject_blank(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("This field is required")
        return value

    @field_validator("size_sq_ft", mode="before")
    @classmethod
    def parse_size(cls, value):
        # "200.0" from a number input still means 200
        if isinstance(value, str):
            try:
                return int(float(value))
            except (ValueError, OverflowError):
                raise ValueError("Size must be a whole number")
        return value

    def to_draft(self, image_url: Optional[str] = None) -> ListingDraft:
        """Build the insert payload with is_available forced true."""
        return ListingDraft(
            title=self.title,
            description=self.description,
            location_city=self.location_city,
            location_zip=self.location_zip,
            price_per_month=self.price_per_month,
            unit_type=self.unit_type,
            size_sq_ft=self.size_sq_ft,
            image_url=image_url,
            is_available=True,
            contact_email=self.contact_email,
        )


class ImageUpload(BaseModel):
    """Image file selected on the form."""
    filename: str = Field(..., min_length=1)
    content: bytes = Field(..., repr=False)
    content_type: str = Field(default="application/octet-stream")

    def validate_image(self) -> "ImageUpload":
        """Reject non-image or empty files before anything reaches storage."""
        if not self.content_type.lower().startswith("image/"):
            raise ImageValidationError(
                f"Unsupported file type: {self.content_type}. Please choose an image."
            )
        if not self.content:
            raise ImageValidationError("Selected image is empty")
        return self

    @classmethod
    def from_payload(cls, payload: dict) -> "ImageUpload":
        """Decode the JSON image object ({filename, content_type, content(base64)})."""
        if not isinstance(payload, dict):
            raise ImageValidationError("Image must be an object with filename and content")

        content_type = payload.get("content_type")
        encoded = payload.get("content") or ""
        if not isinstance(encoded, str):
            raise ImageValidationError("Image content must be a base64 string")
        if "," in encoded and encoded.startswith("data:"):
            # data URL from a FileReader preview
            header, encoded = encoded.split(",", 1)
            content_type = content_type or header[5:].split(";", 1)[0]

        try:
            content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise ImageValidationError("Image content is not valid base64")

        return cls(
            filename=payload.get("filename") or "",
            content=content,
            content_type=content_type or "application/octet-stream",
        ).validate_image()
