"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the reports.
"""

import io

import pandas as pd

from services.report_service import REPORT_COLUMNS, ReportService
from utils.logger import get_logger

logger = get_logger(__name__)

# Excel caps sheet names at 31 characters.
_MAX_SHEET_NAME = 31


class ExportService:
    """Generates downloadable reports in CSV and Excel formats."""

    def __init__(self, report_service: ReportService):
        self.report_service = report_service

    def _frame(self, name: str) -> pd.DataFrame:
        """Run a report and load it into a DataFrame with a fixed column order."""
        rows = self.report_service.run(name)
        return pd.DataFrame(rows, columns=REPORT_COLUMNS[name])

    def export_report_csv(self, name: str) -> io.BytesIO:
        """
        Export one report as a CSV file.

        Args:
            name: Report name, e.g. 'occupancy'.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._frame(name)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported report '{name}' ({len(df)} rows) as CSV")
        return buffer

    def export_report_excel(self, name: str) -> io.BytesIO:
        """
        Export one report as an Excel (.xlsx) file with a single sheet.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self._frame(name)
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=name[:_MAX_SHEET_NAME], index=False)
        buffer.seek(0)
        logger.info(f"Exported report '{name}' ({len(df)} rows) as Excel")
        return buffer

    def export_all_reports_excel(self) -> io.BytesIO:
        """Export every report into one workbook, one sheet per report."""
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for name in self.report_service.names:
                self._frame(name).to_excel(writer, sheet_name=name[:_MAX_SHEET_NAME], index=False)
        buffer.seek(0)
        logger.info("Exported all reports as one Excel workbook")
        return buffer
