"""
models/parole.py
----------------
Domain model for parole review records.
"""

from dataclasses import dataclass
from typing import Any, Optional

from utils.dates import DateLike, to_iso


@dataclass
class Parole:
    """
    A parole review for one prisoner.

    Attributes:
        parole_id: Primary key (None for new records).
        prisoner_id: The prisoner under review.
        status: Outcome of the review, usually one of the prisoner parole statuses.
        review_date: Date of the review hearing.
        notes: Free text, up to 500 characters.
        prisoner_name: 'First Last' of the prisoner, filled on reads only.
    """
    prisoner_id: Optional[int]
    status: str
    review_date: Optional[DateLike] = None
    notes: Optional[str] = None
    parole_id: Optional[int] = None
    prisoner_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Parole":
        return cls(
            prisoner_id=data.get("prisoner_id"),
            status=data.get("status"),
            review_date=data.get("review_date"),
            notes=data.get("notes"),
            parole_id=data.get("parole_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "parole_id": self.parole_id,
            "prisoner_id": self.prisoner_id,
            "prisoner_name": self.prisoner_name,
            "status": self.status,
            "review_date": to_iso(self.review_date),
            "notes": self.notes,
        }
