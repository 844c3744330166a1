"""
models/prisoner.py
------------------
Domain model for a prisoner record.
"""

from dataclasses import dataclass
from typing import Any, Optional

from utils.dates import DateLike, to_iso


@dataclass
class Prisoner:
    """
    Represents one prisoner.

    Attributes:
        prisoner_id: Primary key from prisoner_id_seq (None for new records).
        cellblock_id: Cell block the prisoner is housed in.
        first_name / last_name: Required names.
        date_of_birth: Date of birth.
        gender: Free text, 'Male' when not given.
        offense: Offense the sentence is for.
        sentence: Free text, e.g. '5 years' or 'Life'.
        admission_date: When the prisoner was admitted.
        release_date: Scheduled release; None means indefinite.
        behavior_rating: 1 (worst) to 5 (best).
        parole_status: Eligible, Ineligible, Pending, Approved or Denied.
    """
    cellblock_id: Optional[int]
    first_name: str
    last_name: str
    date_of_birth: Optional[DateLike] = None
    gender: Optional[str] = None
    offense: Optional[str] = None
    sentence: Optional[str] = None
    admission_date: Optional[DateLike] = None
    release_date: Optional[DateLike] = None
    behavior_rating: Optional[int] = None
    parole_status: Optional[str] = None
    prisoner_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Prisoner":
        """Build a Prisoner from a JSON payload. Accepts the legacy fName/lName keys."""
        return cls(
            cellblock_id=data.get("cellblock_id"),
            first_name=data.get("first_name", data.get("fName")),
            last_name=data.get("last_name", data.get("lName")),
            date_of_birth=data.get("date_of_birth"),
            gender=data.get("gender"),
            offense=data.get("offense"),
            sentence=data.get("sentence"),
            admission_date=data.get("admission_date"),
            release_date=data.get("release_date"),
            behavior_rating=data.get("behavior_rating"),
            parole_status=data.get("parole_status"),
            prisoner_id=data.get("prisoner_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "prisoner_id": self.prisoner_id,
            "cellblock_id": self.cellblock_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": to_iso(self.date_of_birth),
            "gender": self.gender,
            "offense": self.offense,
            "sentence": self.sentence,
            "admission_date": to_iso(self.admission_date),
            "release_date": to_iso(self.release_date),
            "behavior_rating": self.behavior_rating,
            "parole_status": self.parole_status,
        }

    def __str__(self) -> str:
        return f"#{self.prisoner_id} {self.full_name} | {self.offense or '-'} | {self.parole_status}"
