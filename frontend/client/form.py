# client/form.py
from datetime import date
from enum import Enum
from typing import Callable, Optional

from client.api import TrackerApi

REQUIRED_FIELDS = ("company", "role", "date")
FORM_FIELDS = ("company", "role", "date", "status", "location", "notes")


class FormMode(str, Enum):
    create = "create"
    edit = "edit"


def blank_form(today: Optional[date] = None) -> dict:
    return {
        "company": "",
        "role": "",
        "date": (today or date.today()).isoformat(),
        "status": "Applied",
        "location": "",
        "notes": "",
    }


class ApplicationForm:
    """Create/edit form: closed, or open in create or edit mode."""

    def __init__(self):
        self.is_open = False
        self.editing: Optional[dict] = None
        self.data: dict = {}

    @property
    def mode(self) -> Optional[FormMode]:
        if not self.is_open:
            return None
        return FormMode.edit if self.editing is not None else FormMode.create

    def open(self, record: Optional[dict] = None, today: Optional[date] = None):
        if record is not None:
            self.editing = record
            self.data = {field: record.get(field) or "" for field in FORM_FIELDS}
        else:
            self.editing = None
            self.data = blank_form(today)
        self.is_open = True

    def close(self):
        self.is_open = False
        self.editing = None

    def update(self, **fields):
        unknown = set(fields) - set(FORM_FIELDS)
        if unknown:
            raise KeyError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
        self.data.update(fields)

    def missing_fields(self) -> list[str]:
        # status is left to the server to check
        return [f for f in REQUIRED_FIELDS if not str(self.data.get(f) or "").strip()]

    def submit(self, api: TrackerApi, reload: Callable[[], object]) -> Optional[dict]:
        """Send the form; returns the saved record, or None if required fields are empty.

        On success the form closes and `reload` fetches the collection again.
        A TrackerApiError leaves the form open with its data intact.
        """
        if not self.is_open:
            raise RuntimeError("Form is not open")
        if self.missing_fields():
            return None

        if self.editing is not None:
            saved = api.update_application(self.editing["id"], dict(self.data))
        else:
            saved = api.create_application(dict(self.data))
        self.close()
        reload()
        return saved


def delete_with_confirmation(
    api: TrackerApi,
    application_id: int,
    confirm: Callable[[str], bool],
    reload: Callable[[], object],
) -> bool:
    """Delete only after `confirm` agrees; reloads the collection afterwards."""
    if not confirm("Delete this application?"):
        return False
    api.delete_application(application_id)
    reload()
    return True
