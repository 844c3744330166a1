"""
models/cell_block.py
--------------------
Domain model for a cell block.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CellBlock:
    """A named group of cells with an overall capacity."""
    name: str
    max_capacity: int
    current_capacity: Optional[int] = None
    cellblock_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CellBlock":
        return cls(
            name=data.get("name", data.get("cellblock_name")),
            max_capacity=data.get("max_capacity"),
            current_capacity=data.get("current_capacity"),
            cellblock_id=data.get("cellblock_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cellblock_id": self.cellblock_id,
            "name": self.name,
            "max_capacity": self.max_capacity,
            "current_capacity": self.current_capacity,
        }
