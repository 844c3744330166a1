"""
repositories/cell_repo.py
-------------------------
Data access layer for cells.
Every read joins the owning cell block to carry its name along.
"""

from typing import Any, Optional

from db.connection import Database, QueryError
from models.cell import Cell
from models.defaults import apply_defaults
from repositories.errors import EntityNotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT = """
    SELECT c.cell_id, c.cell_number, c.cellblock_id, c.capacity, c.occupancy, cb.cellblock_name
    FROM cell c
    JOIN cell_block cb ON cb.cellblock_id = c.cellblock_id
"""


class CellRepository:
    """Repository for CRUD operations on the cell table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(self, cell: Cell) -> Cell:
        """Insert a cell and return the stored record."""
        sql = """
            INSERT INTO cell (cell_number, cellblock_id, capacity, occupancy)
            VALUES (%(cell_number)s, %(cellblock_id)s, %(capacity)s, %(occupancy)s)
            RETURNING cell_id;
        """
        params = apply_defaults("cell", self._to_params(cell))
        try:
            cell_id = self.db.execute(sql, params).first()["cell_id"]
        except QueryError as e:
            logger.error(f"Failed to add cell {cell.cell_number}: {e}")
            raise
        logger.info(f"Added cell #{cell_id} ({cell.cell_number}) to block {cell.cellblock_id}")
        return self.get_by_id(cell_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Cell]:
        sql = _SELECT + " ORDER BY c.cell_id;"
        return [self._row_to_cell(r) for r in self.db.execute(sql).rows]

    def get_by_id(self, cell_id: int) -> Optional[Cell]:
        """Fetch a single cell, or None."""
        sql = _SELECT + " WHERE c.cell_id = %(cell_id)s;"
        row = self.db.execute(sql, {"cell_id": cell_id}).first()
        return self._row_to_cell(row) if row else None

    def get_by_cell_block_id(self, cellblock_id: int) -> list[Cell]:
        """Return the cells of one block ordered by cell number."""
        sql = _SELECT + " WHERE c.cellblock_id = %(cellblock_id)s ORDER BY c.cell_number;"
        return [
            self._row_to_cell(r)
            for r in self.db.execute(sql, {"cellblock_id": cellblock_id}).rows
        ]

    def get_occupancy(self) -> list[dict]:
        """
        Capacity and free space of every cell.

        Returns:
            List of dicts ordered by block then cell number, each with
            'available_space' = capacity - occupancy.
        """
        sql = """
            SELECT c.cell_id, c.cell_number, c.cellblock_id, cb.cellblock_name,
                   c.capacity, c.occupancy, (c.capacity - c.occupancy) AS available_space
            FROM cell c
            JOIN cell_block cb ON cb.cellblock_id = c.cellblock_id
            ORDER BY c.cellblock_id, c.cell_number;
        """
        return self.db.execute(sql).rows

    # ── UPDATE ────────────────────────────────────────────

    def update(self, cell_id: int, cell: Cell) -> Cell:
        """
        Replace every mutable field of a cell.

        Raises:
            EntityNotFoundError: If no cell has this id.
        """
        sql = """
            UPDATE cell
            SET cell_number = %(cell_number)s, cellblock_id = %(cellblock_id)s,
                capacity = %(capacity)s, occupancy = %(occupancy)s
            WHERE cell_id = %(cell_id)s;
        """
        params = self._to_params(cell)
        params["cell_id"] = cell_id
        try:
            result = self.db.execute(sql, params)
        except QueryError as e:
            logger.error(f"Failed to update cell #{cell_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Cell", cell_id)
        logger.info(f"Updated cell #{cell_id}")
        return self.get_by_id(cell_id)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, cell_id: int) -> None:
        """
        Delete a cell by id.

        Raises:
            EntityNotFoundError: If no cell has this id.
        """
        sql = "DELETE FROM cell WHERE cell_id = %(cell_id)s;"
        try:
            result = self.db.execute(sql, {"cell_id": cell_id})
        except QueryError as e:
            logger.error(f"Failed to delete cell #{cell_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Cell", cell_id)
        logger.info(f"Deleted cell #{cell_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _to_params(cell: Cell) -> dict[str, Any]:
        return {
            "cell_number": cell.cell_number,
            "cellblock_id": cell.cellblock_id,
            "capacity": cell.capacity,
            "occupancy": cell.occupancy,
        }

    @staticmethod
    def _row_to_cell(row: dict) -> Cell:
        """Convert a joined cell/cell_block row to a Cell domain object."""
        return Cell(
            cell_id=row["cell_id"],
            cell_number=row["cell_number"],
            cellblock_id=row["cellblock_id"],
            capacity=row["capacity"],
            occupancy=row["occupancy"],
            cellblock_name=row["cellblock_name"],
        )
