"""
models/cell.py
--------------
Domain model for a single cell.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Cell:
    """
    Represents one cell inside a cell block.

    Attributes:
        cell_id: Primary key (None for new records).
        cell_number: Label, unique within its block (e.g. 'A-101').
        cellblock_id: Owning cell block.
        capacity: Number of beds.
        occupancy: Beds currently taken.
        cellblock_name: Name of the owning block, filled on reads only.
    """
    cell_number: str
    cellblock_id: Optional[int]
    capacity: int
    occupancy: Optional[int] = None
    cell_id: Optional[int] = None
    cellblock_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Cell":
        return cls(
            cell_number=data.get("cell_number"),
            cellblock_id=data.get("cellblock_id"),
            capacity=data.get("capacity"),
            occupancy=data.get("occupancy"),
            cell_id=data.get("cell_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cell_id": self.cell_id,
            "cell_number": self.cell_number,
            "cellblock_id": self.cellblock_id,
            "cellblock_name": self.cellblock_name,
            "capacity": self.capacity,
            "occupancy": self.occupancy,
        }
