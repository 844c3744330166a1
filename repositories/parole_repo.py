"""
repositories/parole_repo.py
---------------------------
Data access layer for parole reviews.

Creating or updating a review can also overwrite the prisoner's own
parole_status. That second write is a separate statement: if it fails the
review is already stored and the two records disagree until retried.
"""

from typing import Any, Optional

from db.connection import Database, QueryError
from models.parole import Parole
from repositories.errors import EntityNotFoundError
from repositories.prisoner_repo import PrisonerRepository
from utils.dates import normalize_date
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT = """
    SELECT p.parole_id, p.prisoner_id, p.status, p.review_date, p.notes,
           pr.first_name, pr.last_name
    FROM parole p
    JOIN prisoner pr ON pr.prisoner_id = p.prisoner_id
"""


class ParoleRepository:
    """Repository for CRUD operations on the parole table."""

    def __init__(self, db: Database, prisoner_repo: Optional[PrisonerRepository] = None):
        self.db = db
        self.prisoner_repo = prisoner_repo or PrisonerRepository(db)

    # ── CREATE ────────────────────────────────────────────

    def create(self, parole: Parole, update_prisoner_status: bool = False) -> Parole:
        """
        Insert a parole review.

        Args:
            parole: The review to persist.
            update_prisoner_status: Also copy the review status onto the prisoner.

        Returns:
            The stored review, re-read with the prisoner's name.
        """
        sql = """
            INSERT INTO parole (prisoner_id, status, review_date, notes)
            VALUES (%(prisoner_id)s, %(status)s, %(review_date)s, %(notes)s)
            RETURNING parole_id;
        """
        try:
            parole_id = self.db.execute(sql, self._to_params(parole)).first()["parole_id"]
        except QueryError as e:
            logger.error(f"Failed to add parole review for prisoner #{parole.prisoner_id}: {e}")
            raise
        logger.info(f"Added parole review #{parole_id} for prisoner #{parole.prisoner_id}")

        if update_prisoner_status:
            self._sync_prisoner_status(parole)
        return self.get_by_id(parole_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Parole]:
        sql = _SELECT + " ORDER BY p.parole_id;"
        return [self._row_to_parole(r) for r in self.db.execute(sql).rows]

    def get_by_id(self, parole_id: int) -> Optional[Parole]:
        """Fetch a single parole review, or None."""
        sql = _SELECT + " WHERE p.parole_id = %(parole_id)s;"
        row = self.db.execute(sql, {"parole_id": parole_id}).first()
        return self._row_to_parole(row) if row else None

    def get_by_prisoner_id(self, prisoner_id: int) -> list[Parole]:
        """Return one prisoner's reviews, most recent first."""
        sql = _SELECT + " WHERE p.prisoner_id = %(prisoner_id)s ORDER BY p.review_date DESC NULLS LAST, p.parole_id DESC;"
        return [
            self._row_to_parole(r)
            for r in self.db.execute(sql, {"prisoner_id": prisoner_id}).rows
        ]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, parole_id: int, parole: Parole, update_prisoner_status: bool = False) -> Parole:
        """
        Replace every field of a parole review.

        Raises:
            EntityNotFoundError: If no review has this id.
        """
        sql = """
            UPDATE parole
            SET prisoner_id = %(prisoner_id)s, status = %(status)s,
                review_date = %(review_date)s, notes = %(notes)s
            WHERE parole_id = %(parole_id)s;
        """
        params = self._to_params(parole)
        params["parole_id"] = parole_id
        try:
            result = self.db.execute(sql, params)
        except QueryError as e:
            logger.error(f"Failed to update parole review #{parole_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Parole record", parole_id)
        logger.info(f"Updated parole review #{parole_id}")

        if update_prisoner_status:
            self._sync_prisoner_status(parole)
        return self.get_by_id(parole_id)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, parole_id: int) -> None:
        """
        Delete a parole review by id.

        Raises:
            EntityNotFoundError: If no review has this id.
        """
        sql = "DELETE FROM parole WHERE parole_id = %(parole_id)s;"
        try:
            result = self.db.execute(sql, {"parole_id": parole_id})
        except QueryError as e:
            logger.error(f"Failed to delete parole review #{parole_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Parole record", parole_id)
        logger.info(f"Deleted parole review #{parole_id}")

    # ── HELPERS ───────────────────────────────────────────

    def _sync_prisoner_status(self, parole: Parole) -> None:
        """Copy the review status onto the prisoner record."""
        if self.prisoner_repo.set_parole_status(parole.prisoner_id, parole.status):
            logger.info(f"Prisoner #{parole.prisoner_id} parole status set to '{parole.status}'")
        else:
            logger.warning(f"Prisoner #{parole.prisoner_id} not found while syncing parole status")

    @staticmethod
    def _to_params(parole: Parole) -> dict[str, Any]:
        return {
            "prisoner_id": parole.prisoner_id,
            "status": parole.status,
            "review_date": normalize_date(parole.review_date),
            "notes": parole.notes,
        }

    @staticmethod
    def _row_to_parole(row: dict) -> Parole:
        """Convert a joined parole/prisoner row to a Parole domain object."""
        return Parole(
            parole_id=row["parole_id"],
            prisoner_id=row["prisoner_id"],
            status=row["status"],
            review_date=row["review_date"],
            notes=row["notes"],
            prisoner_name=f"{row['first_name']} {row['last_name']}",
        )
