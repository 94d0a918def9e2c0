"""
Domain package for the Patient Directory.

Exports the patient record models and the query/result contracts shared by
the engine, the service layer and the transports.
"""

from patient_directory.domain.models import Contact, Patient
from patient_directory.domain.query import Query, ResultEnvelope, SortDirection, SortSpec

__all__ = [
    "Contact",
    "Patient",
    "Query",
    "ResultEnvelope",
    "SortDirection",
    "SortSpec",
]
