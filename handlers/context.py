"""
handlers/context.py
-------------------
Application-lifetime state shared by every handler.

The entry point builds one AppContext around the initialized Database and
stores it on the Flask app; handlers fetch it with ``get_context()``.
"""

from dataclasses import dataclass

from flask import current_app

from db.connection import Database
from repositories.cell_block_repo import CellBlockRepository
from repositories.cell_repo import CellRepository
from repositories.parole_repo import ParoleRepository
from repositories.prisoner_repo import PrisonerRepository
from repositories.report_repo import ReportRepository
from services.export_service import ExportService
from services.report_service import ReportService

EXTENSION_KEY = "prison_records"


@dataclass
class AppContext:
    prisoners: PrisonerRepository
    cell_blocks: CellBlockRepository
    cells: CellRepository
    paroles: ParoleRepository
    reports: ReportService
    exports: ExportService

    @classmethod
    def build(cls, db: Database) -> "AppContext":
        """Wire every repository and service around one Database."""
        prisoners = PrisonerRepository(db)
        cell_blocks = CellBlockRepository(db)
        reports = ReportService(ReportRepository(db), cell_blocks)
        return cls(
            prisoners=prisoners,
            cell_blocks=cell_blocks,
            cells=CellRepository(db),
            paroles=ParoleRepository(db, prisoners),
            reports=reports,
            exports=ExportService(reports),
        )


def get_context() -> AppContext:
    return current_app.extensions[EXTENSION_KEY]
