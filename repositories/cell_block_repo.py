"""
repositories/cell_block_repo.py
-------------------------------
Data access layer for cell blocks.
"""

from typing import Any, Optional

from db.connection import Database, QueryError
from models.cell_block import CellBlock
from models.defaults import apply_defaults
from repositories.errors import EntityNotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


class CellBlockRepository:
    """Repository for CRUD operations on the cell_block table."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, cell_block: CellBlock) -> CellBlock:
        """Insert a cell block and return the stored record."""
        sql = """
            INSERT INTO cell_block (cellblock_name, max_capacity, current_capacity)
            VALUES (%(cellblock_name)s, %(max_capacity)s, %(current_capacity)s)
            RETURNING cellblock_id;
        """
        params = apply_defaults("cell_block", self._to_params(cell_block))
        try:
            cellblock_id = self.db.execute(sql, params).first()["cellblock_id"]
        except QueryError as e:
            logger.error(f"Failed to add cell block '{cell_block.name}': {e}")
            raise
        logger.info(f"Added cell block #{cellblock_id} '{cell_block.name}'")
        return self.get_by_id(cellblock_id)

    def get_all(self) -> list[CellBlock]:
        sql = """
            SELECT cellblock_id, cellblock_name, max_capacity, current_capacity
            FROM cell_block ORDER BY cellblock_id;
        """
        return [self._row_to_cell_block(r) for r in self.db.execute(sql).rows]

    def get_by_id(self, cellblock_id: int) -> Optional[CellBlock]:
        """Fetch a single cell block, or None."""
        sql = """
            SELECT cellblock_id, cellblock_name, max_capacity, current_capacity
            FROM cell_block WHERE cellblock_id = %(cellblock_id)s;
        """
        row = self.db.execute(sql, {"cellblock_id": cellblock_id}).first()
        return self._row_to_cell_block(row) if row else None

    def get_occupancy(self) -> list[dict]:
        """
        Count the prisoners housed in each cell block.

        Returns:
            List of dicts: [{'cellblock_id', 'name', 'max_capacity',
            'current_capacity', 'prisoner_count'}, ...] ordered by id.
        """
        sql = """
            SELECT cb.cellblock_id, cb.cellblock_name, cb.max_capacity, cb.current_capacity,
                   COUNT(p.prisoner_id) AS prisoner_count
            FROM cell_block cb
            LEFT JOIN prisoner p ON p.cellblock_id = cb.cellblock_id
            GROUP BY cb.cellblock_id, cb.cellblock_name, cb.max_capacity, cb.current_capacity
            ORDER BY cb.cellblock_id;
        """
        return [
            {
                "cellblock_id": r["cellblock_id"],
                "name": r["cellblock_name"],
                "max_capacity": r["max_capacity"],
                "current_capacity": r["current_capacity"],
                "prisoner_count": r["prisoner_count"],
            }
            for r in self.db.execute(sql).rows
        ]

    def update(self, cellblock_id: int, cell_block: CellBlock) -> CellBlock:
        """
        Replace name and capacities of a cell block.

        Raises:
            EntityNotFoundError: If no cell block has this id.
        """
        sql = """
            UPDATE cell_block
            SET cellblock_name = %(cellblock_name)s,
                max_capacity = %(max_capacity)s,
                current_capacity = %(current_capacity)s
            WHERE cellblock_id = %(cellblock_id)s;
        """
        params = self._to_params(cell_block)
        params["cellblock_id"] = cellblock_id
        try:
            result = self.db.execute(sql, params)
        except QueryError as e:
            logger.error(f"Failed to update cell block #{cellblock_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Cell block", cellblock_id)
        logger.info(f"Updated cell block #{cellblock_id}")
        return self.get_by_id(cellblock_id)

    def delete(self, cellblock_id: int) -> None:
        """
        Delete a cell block. Fails with a QueryError while cells or
        prisoners still reference it.

        Raises:
            EntityNotFoundError: If no cell block has this id.
        """
        sql = "DELETE FROM cell_block WHERE cellblock_id = %(cellblock_id)s;"
        try:
            result = self.db.execute(sql, {"cellblock_id": cellblock_id})
        except QueryError as e:
            logger.error(f"Failed to delete cell block #{cellblock_id}: {e}")
            raise
        if result.rowcount == 0:
            raise EntityNotFoundError("Cell block", cellblock_id)
        logger.info(f"Deleted cell block #{cellblock_id}")

    @staticmethod
    def _to_params(cell_block: CellBlock) -> dict[str, Any]:
        return {
            "cellblock_name": cell_block.name,
            "max_capacity": cell_block.max_capacity,
            "current_capacity": cell_block.current_capacity,
        }

    @staticmethod
    def _row_to_cell_block(row: dict) -> CellBlock:
        return CellBlock(
            cellblock_id=row["cellblock_id"],
            name=row["cellblock_name"],
            max_capacity=row["max_capacity"],
            current_capacity=row["current_capacity"],
        )
