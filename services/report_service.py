"""
services/report_service.py
--------------------------
The five prison population reports.

Counts come from the database; every percentage and duration is computed
here with Decimal and rounded half away from zero to two places.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from repositories.cell_block_repo import CellBlockRepository
from repositories.report_repo import ReportRepository
from utils.dates import to_iso
from utils.logger import get_logger

logger = get_logger(__name__)

_TWO_PLACES = Decimal("0.01")
_DAYS_PER_YEAR = Decimal(365)
PAROLE_WINDOW = relativedelta(months=6)

# Column order of every report, also used for empty exports.
REPORT_COLUMNS: dict[str, list[str]] = {
    "occupancy": [
        "cellblock_id", "name", "max_capacity", "current_capacity",
        "prisoner_count", "occupancy_percentage",
    ],
    "parole-eligibility": [
        "prisoner_id", "prisoner_name", "offense", "sentence", "admission_date",
        "release_date", "behavior_rating", "parole_status", "cellblock_name",
    ],
    "offense-statistics": ["offense", "count", "percentage"],
    "length-of-stay": [
        "prisoner_id", "prisoner_name", "offense", "admission_date", "release_date",
        "total_years", "years_served", "years_remaining", "percentage_served",
    ],
    "behavior-ratings": ["behavior_rating", "count", "percentage"],
}


class UnknownReportError(LookupError):
    """Raised for a report name that is not in REPORT_COLUMNS."""


def round2(value: Decimal) -> float:
    """Round half away from zero to two decimal places."""
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def percentage(part, whole) -> Optional[float]:
    """``part / whole * 100`` rounded to two places, None when whole is not positive."""
    if not whole or whole <= 0:
        return None
    return round2(Decimal(part) * 100 / Decimal(whole))


def _days(delta: timedelta) -> Decimal:
    return Decimal(delta.days) + Decimal(delta.seconds) / Decimal(86400)


class ReportService:
    """Runs the reports by name and shapes their rows for JSON and exports."""

    def __init__(
        self,
        report_repo: ReportRepository,
        cell_block_repo: CellBlockRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.report_repo = report_repo
        self.cell_block_repo = cell_block_repo
        self.clock = clock
        self._reports: dict[str, Callable[[], list[dict]]] = {
            "occupancy": self.occupancy_by_block,
            "parole-eligibility": self.upcoming_parole_eligibility,
            "offense-statistics": self.offense_statistics,
            "length-of-stay": self.length_of_stay,
            "behavior-ratings": self.behavior_rating_distribution,
        }

    @property
    def names(self) -> list[str]:
        return list(self._reports)

    def run(self, name: str) -> list[dict]:
        """
        Run a report by its name.

        Raises:
            UnknownReportError: If no report has this name.
        """
        report = self._reports.get(name)
        if report is None:
            raise UnknownReportError(f"Unknown report '{name}'")
        rows = report()
        logger.info(f"Report '{name}' returned {len(rows)} row(s)")
        return rows

    # ── REPORTS ───────────────────────────────────────────

    def occupancy_by_block(self) -> list[dict]:
        """Prisoners per block as a share of max capacity, fullest block first."""
        rows = []
        for block in self.cell_block_repo.get_occupancy():
            rows.append({
                **block,
                "occupancy_percentage": percentage(block["prisoner_count"], block["max_capacity"]),
            })
        rows.sort(key=lambda r: (
            r["occupancy_percentage"] is None,
            -(r["occupancy_percentage"] or 0),
            r["cellblock_id"],
        ))
        return rows

    def upcoming_parole_eligibility(self, now: Optional[datetime] = None) -> list[dict]:
        """Eligible or pending prisoners released within the next six months."""
        now = now or self.clock()
        rows = self.report_repo.get_parole_candidates(now, now + PAROLE_WINDOW)
        return [
            {
                **row,
                "admission_date": to_iso(row["admission_date"]),
                "release_date": to_iso(row["release_date"]),
            }
            for row in rows
        ]

    def offense_statistics(self) -> list[dict]:
        """Share of the prison population per offense, most common first."""
        rows = self.report_repo.get_offense_counts()
        total = sum(r["count"] for r in rows)
        return [
            {"offense": r["offense"], "count": r["count"], "percentage": percentage(r["count"], total)}
            for r in rows
        ]

    def length_of_stay(self, now: Optional[datetime] = None) -> list[dict]:
        """
        Sentence span, time served and time remaining (in years of 365 days)
        for everyone not yet released, furthest along first.
        """
        now = now or self.clock()
        rows = []
        for r in self.report_repo.get_sentences_in_progress(now):
            admission, release = r["admission_date"], r["release_date"]
            total = served = None
            if admission is not None:
                total = _days(release - admission) / _DAYS_PER_YEAR
                served = _days(now - admission) / _DAYS_PER_YEAR
            remaining = _days(release - now) / _DAYS_PER_YEAR

            rows.append({
                "prisoner_id": r["prisoner_id"],
                "prisoner_name": r["prisoner_name"],
                "offense": r["offense"],
                "admission_date": to_iso(admission),
                "release_date": to_iso(release),
                "total_years": round2(total) if total is not None else None,
                "years_served": round2(served) if served is not None else None,
                "years_remaining": round2(remaining),
                "percentage_served": percentage(served, total),
            })
        rows.sort(key=lambda r: (
            r["percentage_served"] is None,
            -(r["percentage_served"] or 0),
            r["prisoner_id"],
        ))
        return rows

    def behavior_rating_distribution(self) -> list[dict]:
        """Share of rated prisoners per behavior rating, best rating first."""
        rows = self.report_repo.get_behavior_rating_counts()
        total = sum(r["count"] for r in rows)
        return [
            {
                "behavior_rating": r["behavior_rating"],
                "count": r["count"],
                "percentage": percentage(r["count"], total),
            }
            for r in rows
        ]
