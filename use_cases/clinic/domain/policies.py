"""
Clinic Policies - Pure Business Rules.

Rules applied to staged data before anything is sent to the backend.
"""

from core.domain import RequiredFieldsValidator


# Fields a doctor draft must fill in, in form order
DOCTOR_REQUIRED_FIELDS = ["name", "speciality"]


class DoctorDraftValidator(RequiredFieldsValidator):
    """Both the name and the speciality of a doctor are required."""

    def __init__(self):
        super().__init__(DOCTOR_REQUIRED_FIELDS)
