import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class ApplicationStatus(str, Enum):
    applied = "Applied"
    interview = "Interview"
    offer = "Offer"
    rejected = "Rejected"


STATUS_VALUES = [s.value for s in ApplicationStatus]

# one message per failing field, in the order fields are checked
FIELD_MESSAGES = {
    "company": "Company name is required",
    "role": "Role is required",
    "date": "Valid date is required",
    "status": "Status must be one of: " + ", ".join(STATUS_VALUES),
}


class ApplicationIn(BaseModel):   # for POST and PUT
    company: str
    role: str
    date: dt.date
    status: ApplicationStatus
    location: Optional[str] = None
    notes: Optional[str] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("company", "role")
    @classmethod
    def not_blank(cls, v: str):
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def calendar_date_only(cls, v):
        # pydantic would otherwise read numbers as unix timestamps
        if not isinstance(v, (str, dt.date)):
            raise ValueError("must be an ISO date string")
        return v

    @field_serializer("date")
    def iso_date(self, v: dt.date) -> str:
        return v.isoformat()


class ApplicationOut(ApplicationIn):
    id: int


class DeleteResult(BaseModel):
    success: bool = True
    message: str = "Application deleted successfully"
    id: int


class ApplicationStats(BaseModel):
    total: int
    applied: int
    interview: int
    offer: int
    rejected: int
    success_rate: str = Field(alias="successRate")
    model_config = ConfigDict(populate_by_name=True)


def validation_messages(errors) -> list[str]:
    """Turn pydantic error dicts into the human-readable list sent to clients.

    Errors on a known field collapse into that field's single message; anything
    else (a non-object body, a bad query parameter) keeps pydantic's own text.
    """
    failed = set()
    others = []
    for err in errors:
        if err.get("type") == "json_invalid":
            others.append("Request body must be valid JSON")
            continue
        loc = [str(part) for part in err.get("loc", ())]
        field = loc[1] if len(loc) > 1 and loc[0] == "body" else None
        if field in FIELD_MESSAGES:
            failed.add(field)
            continue
        if loc and loc[0] == "body" and len(loc) == 1:
            others.append("Request body must be a JSON object")
            continue
        where = ".".join(loc[1:]) or ".".join(loc)
        others.append(f"{where}: {err.get('msg')}")

    messages = [msg for field, msg in FIELD_MESSAGES.items() if field in failed]
    for msg in others:
        if msg not in messages:
            messages.append(msg)
    return messages
