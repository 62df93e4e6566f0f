"""
Doctor Edit Session.

Extends the core EditSession with the doctor form: two required text fields
and the labels the form shows in each mode.
"""

from typing import Any, Dict, Optional

from core.data import EntityStore, Repository
from core.session import EditMode, EditSession

from .domain import Doctor, DoctorDraft, DoctorDraftValidator

SUBMIT_LABELS = {
    EditMode.CREATE: "Add Doctor",
    EditMode.EDIT: "Update Doctor",
}


class DoctorEditSession(EditSession[Doctor, DoctorDraft]):
    """
    Create/edit controller for the doctor roster.

    Submitting in CREATE mode appends the created doctor to the store;
    in EDIT mode the stored doctor is replaced by the server's version.
    """

    FIELDS = ("name", "speciality")

    def __init__(
        self,
        repository: Repository[Doctor, DoctorDraft],
        store: EntityStore[Doctor],
        validator: Optional[DoctorDraftValidator] = None,
    ):
        super().__init__(repository, store, validator or DoctorDraftValidator())

    def _draft_from(self, entity: Doctor) -> Dict[str, str]:
        return {"name": entity.name, "speciality": entity.speciality}

    def _build_draft(self, values: Dict[str, str]) -> DoctorDraft:
        return DoctorDraft(name=values["name"], speciality=values["speciality"])

    @property
    def submit_label(self) -> str:
        return SUBMIT_LABELS[self.mode]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["submit_label"] = self.submit_label
        data["can_cancel"] = self.is_editing
        return data
