"""
db/init_db.py
-------------
Creates the database schema (tables, sequence, indexes) if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db            # create missing objects, seed default block
    python -m db.init_db --reset    # drop everything first
"""

import sys

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Cell blocks: administrative grouping of cells
CREATE TABLE IF NOT EXISTS cell_block (
    cellblock_id        SERIAL PRIMARY KEY,
    cellblock_name      VARCHAR(50) NOT NULL,
    max_capacity        INT NOT NULL CHECK (max_capacity > 0),
    current_capacity    INT NOT NULL DEFAULT 0 CHECK (current_capacity >= 0)
);

-- Cells: belong to exactly one cell block
CREATE TABLE IF NOT EXISTS cell (
    cell_id             SERIAL PRIMARY KEY,
    cell_number         VARCHAR(20) NOT NULL,
    cellblock_id        INT NOT NULL REFERENCES cell_block(cellblock_id),
    capacity            INT NOT NULL CHECK (capacity > 0),
    occupancy           INT NOT NULL DEFAULT 0 CHECK (occupancy >= 0)
);

-- Prisoner ids are handed out from their own sequence
CREATE SEQUENCE IF NOT EXISTS prisoner_id_seq START WITH 1000 INCREMENT BY 1 NO CYCLE;

CREATE TABLE IF NOT EXISTS prisoner (
    prisoner_id         INT PRIMARY KEY DEFAULT nextval('prisoner_id_seq'),
    cellblock_id        INT NOT NULL REFERENCES cell_block(cellblock_id),
    first_name          VARCHAR(50) NOT NULL,
    last_name           VARCHAR(50) NOT NULL,
    date_of_birth       DATE,
    gender              VARCHAR(10),
    offense             VARCHAR(100),
    sentence            VARCHAR(50),
    admission_date      TIMESTAMP,
    release_date        TIMESTAMP,
    behavior_rating     SMALLINT CHECK (behavior_rating BETWEEN 1 AND 5),
    parole_status       VARCHAR(20)
        CHECK (parole_status IN ('Eligible', 'Ineligible', 'Pending', 'Approved', 'Denied'))
);

-- Parole reviews: one prisoner, many reviews
CREATE TABLE IF NOT EXISTS parole (
    parole_id           SERIAL PRIMARY KEY,
    prisoner_id         INT NOT NULL REFERENCES prisoner(prisoner_id),
    status              VARCHAR(20) NOT NULL,
    review_date         DATE,
    notes               VARCHAR(500)
);

-- Indexes on foreign keys and report filters
CREATE INDEX IF NOT EXISTS idx_prisoner_cellblock ON prisoner(cellblock_id);
CREATE INDEX IF NOT EXISTS idx_prisoner_parole_status ON prisoner(parole_status);
CREATE INDEX IF NOT EXISTS idx_prisoner_release_date ON prisoner(release_date);
CREATE INDEX IF NOT EXISTS idx_cell_cellblock ON cell(cellblock_id);
CREATE INDEX IF NOT EXISTS idx_parole_prisoner ON parole(prisoner_id);
"""

DROP_SQL = """
DROP TABLE IF EXISTS parole CASCADE;
DROP TABLE IF EXISTS prisoner CASCADE;
DROP TABLE IF EXISTS cell CASCADE;
DROP TABLE IF EXISTS cell_block CASCADE;
DROP SEQUENCE IF EXISTS prisoner_id_seq;
"""

DEFAULT_CELL_BLOCK = {"cellblock_name": "Block A - Maximum Security", "max_capacity": 50}


def create_tables(db: Database, drop_existing: bool = False) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        db: An initialized Database.
        drop_existing: Drop all tables and the sequence first.
    """
    try:
        if drop_existing:
            db.execute(DROP_SQL, autocommit=False)
            logger.info("Dropped existing schema.")
        db.execute(SCHEMA_SQL, autocommit=False)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


def seed_default_cell_block(db: Database) -> bool:
    """
    Insert the default cell block when the table is empty, so prisoners
    can be admitted on a fresh database.

    Returns:
        True if a block was inserted.
    """
    sql = """
        INSERT INTO cell_block (cellblock_name, max_capacity)
        SELECT %(cellblock_name)s, %(max_capacity)s
        WHERE NOT EXISTS (SELECT 1 FROM cell_block);
    """
    inserted = db.execute(sql, DEFAULT_CELL_BLOCK).rowcount > 0
    if inserted:
        logger.info(f"Seeded default cell block '{DEFAULT_CELL_BLOCK['cellblock_name']}'.")
    return inserted


if __name__ == "__main__":
    database = Database()
    database.initialize()
    try:
        create_tables(database, drop_existing="--reset" in sys.argv)
        seed_default_cell_block(database)
    finally:
        database.close()
    print("Database schema created successfully.")
