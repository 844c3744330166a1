"""
repositories/report_repo.py
---------------------------
Read-only aggregate queries behind the reports.
SQL does the filtering, grouping and counting; percentages and durations
are computed by services.report_service.
"""

from datetime import datetime

from db.connection import Database


class ReportRepository:
    """Aggregate reads over the prisoner table for the reports."""

    def __init__(self, db: Database):
        self.db = db

    def get_parole_candidates(self, now: datetime, window_end: datetime) -> list[dict]:
        """
        Prisoners marked Eligible or Pending whose release date falls in
        (now, window_end], earliest release first.
        """
        sql = """
            SELECT p.prisoner_id, p.first_name || ' ' || p.last_name AS prisoner_name,
                   p.offense, p.sentence, p.admission_date, p.release_date,
                   p.behavior_rating, p.parole_status, cb.cellblock_name
            FROM prisoner p
            JOIN cell_block cb ON cb.cellblock_id = p.cellblock_id
            WHERE p.parole_status IN ('Eligible', 'Pending')
              AND p.release_date > %(now)s
              AND p.release_date <= %(window_end)s
            ORDER BY p.release_date ASC;
        """
        return self.db.execute(sql, {"now": now, "window_end": window_end}).rows

    def get_offense_counts(self) -> list[dict]:
        """Number of prisoners per offense, null offense included."""
        sql = """
            SELECT offense, COUNT(*) AS count
            FROM prisoner
            GROUP BY offense
            ORDER BY count DESC, offense;
        """
        return self.db.execute(sql).rows

    def get_sentences_in_progress(self, now: datetime) -> list[dict]:
        """Prisoners whose release date is still ahead of ``now``."""
        sql = """
            SELECT p.prisoner_id, p.first_name || ' ' || p.last_name AS prisoner_name,
                   p.offense, p.admission_date, p.release_date
            FROM prisoner p
            WHERE p.release_date > %(now)s
            ORDER BY p.prisoner_id;
        """
        return self.db.execute(sql, {"now": now}).rows

    def get_behavior_rating_counts(self) -> list[dict]:
        """Number of prisoners per non-null behavior rating."""
        sql = """
            SELECT behavior_rating, COUNT(*) AS count
            FROM prisoner
            WHERE behavior_rating IS NOT NULL
            GROUP BY behavior_rating
            ORDER BY behavior_rating DESC;
        """
        return self.db.execute(sql).rows
