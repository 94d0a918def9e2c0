"""
Domain models for the Patient Directory.

Defines the patient record schema as loaded from the data source. The query
engine works on plain mappings exactly as loaded; the data source checks each
record against `Patient` and logs the ones that do not fit, without dropping
or coercing them.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class Contact(BaseModel):
    """
    One entry of a patient's contact list. Every sub-field is optional.
    """

    address: Optional[str] = Field(None, description="Postal address.")
    number: Optional[str] = Field(None, description="Phone number, kept as raw text.")
    email: Optional[str] = Field(None, description="Email address.")

    model_config = {
        "frozen": True,
        "extra": "allow",
    }


class Patient(BaseModel):
    """
    Representation of a single patient in the directory.

    Unknown fields are preserved so that any attribute present in the source
    data can be used as an equality filter.
    """

    patient_id: int = Field(..., description="Primary key.")
    patient_name: Optional[str] = Field(None, description="Full display name.")
    age: Optional[Union[int, float]] = Field(None, description="Age in years.")
    photo_url: Optional[str] = Field(None, description="Avatar URL, if any.")
    contact: List[Contact] = Field(default_factory=list, description="Contact entries.")
    medical_issue: Optional[str] = Field(None, description="Categorical diagnosis label.")

    model_config = {
        "frozen": True,
        "extra": "allow",
        "populate_by_name": True,
    }


__all__ = ["Contact", "Patient"]
