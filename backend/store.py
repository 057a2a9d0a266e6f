import json
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from schemas.applications import (
    ApplicationIn, ApplicationOut, ApplicationStats, ApplicationStatus,
)

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "data" / "applications.json"
DATA_FILE = os.getenv("DATA_FILE", str(DEFAULT_DATA_FILE))
SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "true").lower() in ("1", "true", "yes")

SAMPLE_APPLICATIONS = [
    {
        "id": 1,
        "company": "Google",
        "role": "Senior Frontend Developer",
        "date": "2026-01-10",
        "status": "Interview",
        "location": "Gurgaon,India",
        "notes": "Technical round scheduled for next week. Focus on system design and React architecture.",
    },
    {
        "id": 2,
        "company": "Meta",
        "role": "Full Stack Engineer Intern",
        "date": "2026-01-08",
        "status": "Applied",
        "location": "Delhi,India",
        "notes": "Submitted portfolio showcasing React and Node.js work.",
    },
    {
        "id": 3,
        "company": "Netflix",
        "role": "Software Engineer",
        "date": "2026-01-05",
        "status": "Offer",
        "location": "Ahmedabad,Gujarat",
        "notes": "Received offer! Compensation package is competitive.",
    },
    {
        "id": 4,
        "company": "Amazon",
        "role": "SDE Intern",
        "date": "2026-01-03",
        "status": "Rejected",
        "location": "Gurgaon,India",
        "notes": "Made it to final round but position filled. Will apply again next cycle.",
    },
    {
        "id": 5,
        "company": "Microsoft",
        "role": "Cloud Engineer",
        "date": "2026-01-12",
        "status": "Applied",
        "location": "Redmond, WA",
        "notes": "Azure platform team. Application submitted with referral.",
    },
]


class StorageError(Exception):
    """The data file could not be read, parsed or written."""


class ApplicationNotFound(Exception):
    def __init__(self, application_id: int):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id


class JsonApplicationStore:
    """Job applications kept as one JSON array on disk.

    Each call reloads the whole file and every mutation rewrites it. Mutations
    run under a single lock so concurrent requests in this process cannot
    overwrite each other's changes, and the file is replaced in one step so
    readers only ever load a complete array.
    """

    def __init__(self, data_file):
        self.data_file = Path(data_file)
        self._lock = threading.Lock()

    # ---------- file access ----------
    def _read(self) -> list[ApplicationOut]:
        if not self.data_file.exists():
            return []
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error(f"Error reading {self.data_file}: {exc}")
            raise StorageError(f"Could not read {self.data_file.name}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"{self.data_file.name} does not contain a JSON array")
        try:
            return [ApplicationOut.model_validate(item) for item in raw]
        except ValidationError as exc:
            logger.error(f"Invalid record in {self.data_file}: {exc}")
            raise StorageError(f"{self.data_file.name} contains an invalid application") from exc

    def _write(self, records: list[ApplicationOut]):
        # readers never see a truncated file: write aside, then swap in
        tmp_path = None
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.data_file.parent,
                prefix=f".{self.data_file.name}.", suffix=".tmp", delete=False,
            ) as f:
                tmp_path = f.name
                json.dump([r.model_dump(mode="json") for r in records], f, indent=2)
            os.replace(tmp_path, self.data_file)
        except OSError as exc:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Error writing {self.data_file}: {exc}")
            raise StorageError(f"Could not write {self.data_file.name}") from exc

    @staticmethod
    def _next_id(records: list[ApplicationOut]) -> int:
        candidate = int(time.time() * 1000)
        highest = max((r.id for r in records), default=0)
        return max(candidate, highest + 1)

    # ---------- operations ----------
    def list_applications(self, status: Optional[str] = None, sort: Optional[str] = None) -> list[ApplicationOut]:
        records = self._read()
        if status and status != "All":
            records = [r for r in records if r.status.value == status]
        return sorted(records, key=lambda r: r.date, reverse=sort != "asc")

    def get(self, application_id: int) -> ApplicationOut:
        for record in self._read():
            if record.id == application_id:
                return record
        raise ApplicationNotFound(application_id)

    def create(self, fields: ApplicationIn) -> ApplicationOut:
        with self._lock:
            records = self._read()
            record = ApplicationOut(id=self._next_id(records), **fields.model_dump())
            records.append(record)
            self._write(records)
        logger.info(f"Created application {record.id} ({record.company} / {record.role})")
        return record

    def update(self, application_id: int, fields: ApplicationIn) -> ApplicationOut:
        with self._lock:
            records = self._read()
            for index, existing in enumerate(records):
                if existing.id == application_id:
                    break
            else:
                raise ApplicationNotFound(application_id)
            record = ApplicationOut(id=application_id, **fields.model_dump())
            records[index] = record
            self._write(records)
        logger.info(f"Updated application {application_id}")
        return record

    def delete(self, application_id: int) -> int:
        with self._lock:
            records = self._read()
            remaining = [r for r in records if r.id != application_id]
            if len(remaining) == len(records):
                raise ApplicationNotFound(application_id)
            self._write(remaining)
        logger.info(f"Deleted application {application_id}")
        return application_id

    def stats(self) -> ApplicationStats:
        records = self._read()
        counts = {s: 0 for s in ApplicationStatus}
        for r in records:
            counts[r.status] += 1
        total = len(records)
        offers = counts[ApplicationStatus.offer]
        rate = f"{offers / total * 100:.2f}%" if total else "0%"
        return ApplicationStats(
            total=total,
            applied=counts[ApplicationStatus.applied],
            interview=counts[ApplicationStatus.interview],
            offer=offers,
            rejected=counts[ApplicationStatus.rejected],
            success_rate=rate,
        )


def init_data_file(data_file=None, seed: Optional[bool] = None) -> Path:
    """Create the data file if it is missing, optionally with sample applications."""
    path = Path(data_file or DATA_FILE)
    if path.exists():
        logger.info(f"Data file exists: {path}")
        return path
    seed = SEED_SAMPLE_DATA if seed is None else seed
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(SAMPLE_APPLICATIONS if seed else [], f, indent=2)
    logger.info(f"Created data file {path}" + (" with sample data" if seed else ""))
    return path


_store = JsonApplicationStore(DATA_FILE)


# dependency to get the store, overridden in tests
def get_store() -> JsonApplicationStore:
    return _store
