"""Schemas shared by every resource."""

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """One violated field rule, as returned in a 400 response."""

    field: str = Field(..., json_schema_extra={"example": "email"})
    message: str = Field(..., json_schema_extra={"example": "Invalid email address"})
