"""
repositories/prisoner_repo.py
-----------------------------
Data access layer for prisoner records.
All SQL queries related to the `prisoner` table live here.
"""

from typing import Any, Optional

from db.connection import Database, QueryError
from models.defaults import apply_defaults
from models.prisoner import Prisoner
from repositories.errors import EntityNotFoundError
from utils.dates import normalize_date, normalize_timestamp
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    prisoner_id, cellblock_id, first_name, last_name, date_of_birth, gender,
    offense, sentence, admission_date, release_date, behavior_rating, parole_status
"""


def _escape_like(value: str) -> str:
    """Make ``%`` and ``_`` match literally inside an ILIKE pattern."""
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PrisonerRepository:
    """Repository for CRUD operations and searches on the prisoner table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(self, prisoner: Prisoner) -> Prisoner:
        """
        Insert a new prisoner. The id comes from prisoner_id_seq.

        Args:
            prisoner: The Prisoner to persist. Missing gender, behavior rating
                and parole status are filled from FIELD_DEFAULTS.

        Returns:
            The stored record, re-read from the database.
        """
        sql = """
            INSERT INTO prisoner (
                cellblock_id, first_name, last_name, date_of_birth, gender, offense,
                sentence, admission_date, release_date, behavior_rating, parole_status
            ) VALUES (
                %(cellblock_id)s, %(first_name)s, %(last_name)s, %(date_of_birth)s, %(gender)s,
                %(offense)s, %(sentence)s, %(admission_date)s, %(release_date)s,
                %(behavior_rating)s, %(parole_status)s
            )
            RETURNING prisoner_id;
        """
        params = apply_defaults("prisoner", self._to_params(prisoner))
        try:
            prisoner_id = self.db.execute(sql, params).first()["prisoner_id"]
        except QueryError as e:
            logger.error(f"Failed to add prisoner {prisoner.full_name}: {e}")
            raise
        logger.info(f"Added prisoner #{prisoner_id} ({prisoner.full_name})")
        return self.get_by_id(prisoner_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Prisoner]:
        """Return every prisoner ordered by id."""
        sql = f"SELECT {_COLUMNS} FROM prisoner ORDER BY prisoner_id;"
        return [self._row_to_prisoner(r) for r in self.db.execute(sql).rows]

    def get_by_id(self, prisoner_id: int) -> Optional[Prisoner]:
        """
        Fetch a single prisoner.

        Returns:
            A Prisoner, or None if no row has this id.
        """
        sql = f"SELECT {_COLUMNS} FROM prisoner WHERE prisoner_id = %(prisoner_id)s;"
        row = self.db.execute(sql, {"prisoner_id": prisoner_id}).first()
        return self._row_to_prisoner(row) if row else None

    def search(
        self,
        name: Optional[str] = None,
        cellblock_id: Optional[int] = None,
        offense: Optional[str] = None,
        parole_status: Optional[str] = None,
    ) -> list[Prisoner]:
        """
        Search prisoners. Every given criterion must match; missing
        criteria are ignored, so no criteria at all returns everyone.

        Args:
            name: Case-insensitive substring of first or last name.
            cellblock_id: Exact cell block.
            offense: Case-insensitive substring of the offense.
            parole_status: Case-insensitive exact parole status.

        Returns:
            Matching prisoners ordered by id.
        """
        sql = f"SELECT {_COLUMNS} FROM prisoner WHERE TRUE"
        params: dict[str, Any] = {}
        if name not in (None, ""):
            sql += (
                " AND (first_name ILIKE '%%' || %(name)s || '%%' ESCAPE '\\'"
                " OR last_name ILIKE '%%' || %(name)s || '%%' ESCAPE '\\')"
            )
            params["name"] = _escape_like(name)
        if cellblock_id not in (None, ""):
            sql += " AND cellblock_id = %(cellblock_id)s"
            params["cellblock_id"] = cellblock_id
        if offense not in (None, ""):
            sql += " AND offense ILIKE '%%' || %(offense)s || '%%' ESCAPE '\\'"
            params["offense"] = _escape_like(offense)
        if parole_status not in (None, ""):
            sql += " AND UPPER(parole_status) = UPPER(%(parole_status)s)"
            params["parole_status"] = parole_status
        sql += " ORDER BY prisoner_id;"

        return [self._row_to_prisoner(r) for r in self.db.execute(sql, params).rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, prisoner_id: int, prisoner: Prisoner) -> Prisoner:
        """
        Replace every mutable field of an existing prisoner.

        Returns:
            The stored record after the update.

        Raises:
            EntityNotFoundError: If no prisoner has this id.
        """
        sql = """
            UPDATE prisoner SET
                cellblock_id = %(cellblock_id)s,
                first_name = %(first_name)s,
                last_name = %(last_name)s,
                date_of_birth = %(date_of_birth)s,
                gender = %(gender)s,
                offense = %(offense)s,
                sentence = %(sentence)s,
                admission_date = %(admission_date)s,
                release_date = %(release_date)s,
                behavior_rating = %(behavior_rating)s,
                parole_status = %(parole_status)s
            WHERE prisoner_id = %(prisoner_id)s;
        """
        params = self._to_params(prisoner)
        params["prisoner_id"] = prisoner_id
        try:
            result = self.db.execute(sql, params)
        except QueryError as e:
            logger.error(f"Failed to update prisoner #{prisoner_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Prisoner", prisoner_id)
        logger.info(f"Updated prisoner #{prisoner_id}")
        return self.get_by_id(prisoner_id)

    def set_parole_status(self, prisoner_id: int, parole_status: str) -> bool:
        """
        Overwrite only the parole status of a prisoner.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = "UPDATE prisoner SET parole_status = %(parole_status)s WHERE prisoner_id = %(prisoner_id)s;"
        try:
            result = self.db.execute(
                sql, {"parole_status": parole_status, "prisoner_id": prisoner_id}
            )
        except QueryError as e:
            logger.error(f"Failed to set parole status of prisoner #{prisoner_id}: {e}")
            raise
        return result.rowcount > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, prisoner_id: int) -> None:
        """
        Delete a prisoner by id.

        Raises:
            EntityNotFoundError: If no prisoner has this id.
        """
        sql = "DELETE FROM prisoner WHERE prisoner_id = %(prisoner_id)s;"
        try:
            result = self.db.execute(sql, {"prisoner_id": prisoner_id})
        except QueryError as e:
            logger.error(f"Failed to delete prisoner #{prisoner_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Prisoner", prisoner_id)
        logger.info(f"Deleted prisoner #{prisoner_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _to_params(prisoner: Prisoner) -> dict[str, Any]:
        """Bind values for insert/update, with dates normalized."""
        return {
            "cellblock_id": prisoner.cellblock_id,
            "first_name": prisoner.first_name,
            "last_name": prisoner.last_name,
            "date_of_birth": normalize_date(prisoner.date_of_birth),
            "gender": prisoner.gender,
            "offense": prisoner.offense,
            "sentence": prisoner.sentence,
            "admission_date": normalize_timestamp(prisoner.admission_date),
            "release_date": normalize_timestamp(prisoner.release_date),
            "behavior_rating": prisoner.behavior_rating,
            "parole_status": prisoner.parole_status,
        }

    @staticmethod
    def _row_to_prisoner(row: dict) -> Prisoner:
        """Convert a database row to a Prisoner domain object."""
        return Prisoner(
            prisoner_id=row["prisoner_id"],
            cellblock_id=row["cellblock_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            date_of_birth=row["date_of_birth"],
            gender=row["gender"],
            offense=row["offense"],
            sentence=row["sentence"],
            admission_date=row["admission_date"],
            release_date=row["release_date"],
            behavior_rating=row["behavior_rating"],
            parole_status=row["parole_status"],
        )
