from datetime import date, datetime

import pytest

from db.connection import QueryError
from models.prisoner import Prisoner
from repositories.errors import EntityNotFoundError
from repositories.prisoner_repo import PrisonerRepository


def _row(**overrides) -> dict:
    row = {
        "prisoner_id": 1000,
        "cellblock_id": 1,
        "first_name": "John",
        "last_name": "Smith",
        "date_of_birth": date(1990, 4, 30),
        "gender": "Male",
        "offense": "Theft",
        "sentence": "5 years",
        "admission_date": datetime(2025, 4, 30),
        "release_date": datetime(2030, 4, 30),
        "behavior_rating": 3,
        "parole_status": "Ineligible",
    }
    row.update(overrides)
    return row


def _prisoner(**overrides) -> Prisoner:
    values = {
        "cellblock_id": 1,
        "first_name": "John",
        "last_name": "Smith",
        "date_of_birth": "04/30/1990",
        "offense": "Theft",
        "sentence": "5 years",
        "admission_date": "2025-04-30",
        "release_date": "04/30/2030",
    }
    values.update(overrides)
    return Prisoner(**values)


def test_create_applies_defaults_normalizes_dates_and_refetches(fake_db):
    fake_db.queue([{"prisoner_id": 1000}]).queue([_row()])
    repo = PrisonerRepository(fake_db)

    created = repo.create(_prisoner())

    insert_sql, params = fake_db.calls[0]
    assert "INSERT INTO prisoner" in insert_sql
    assert "prisoner_id" not in params
    assert params["gender"] == "Male"
    assert params["behavior_rating"] == 3
    assert params["parole_status"] == "Ineligible"
    assert params["date_of_birth"] == "1990-04-30"
    assert params["admission_date"] == "2025-04-30 00:00:00"
    assert params["release_date"] == "2030-04-30 00:00:00"

    select_sql, select_params = fake_db.calls[1]
    assert select_sql.strip().startswith("SELECT")
    assert select_params == {"prisoner_id": 1000}
    assert created.prisoner_id == 1000
    assert created.to_dict()["date_of_birth"] == "1990-04-30"
    assert created.to_dict()["admission_date"] == "2025-04-30T00:00:00"


def test_create_keeps_explicit_values(fake_db):
    fake_db.queue([{"prisoner_id": 1001}]).queue([_row(prisoner_id=1001)])

    PrisonerRepository(fake_db).create(
        _prisoner(gender="Female", behavior_rating=5, parole_status="Eligible", release_date=None)
    )

    params = fake_db.calls[0][1]
    assert params["gender"] == "Female"
    assert params["behavior_rating"] == 5
    assert params["parole_status"] == "Eligible"
    assert params["release_date"] is None


def test_us_and_iso_inputs_are_stored_identically(fake_db):
    fake_db.queue([{"prisoner_id": 1}]).queue([_row()])
    fake_db.queue([{"prisoner_id": 2}]).queue([_row()])
    repo = PrisonerRepository(fake_db)

    repo.create(_prisoner(date_of_birth="04/30/2025", admission_date="04/30/2025"))
    repo.create(_prisoner(date_of_birth="2025-04-30", admission_date="2025-04-30"))

    first, second = fake_db.calls[0][1], fake_db.calls[2][1]
    assert first["date_of_birth"] == second["date_of_birth"] == "2025-04-30"
    assert first["admission_date"] == second["admission_date"] == "2025-04-30 00:00:00"


def test_create_failure_propagates(fake_db):
    fake_db.queue_error(QueryError("INSERT", {}, Exception("violates foreign key constraint")))

    with pytest.raises(QueryError, match="foreign key"):
        PrisonerRepository(fake_db).create(_prisoner(cellblock_id=99))


def test_get_by_id_returns_none_when_absent(fake_db):
    assert PrisonerRepository(fake_db).get_by_id(42) is None


def test_get_all_maps_rows(fake_db):
    fake_db.queue([_row(), _row(prisoner_id=1001, first_name="Jane")])

    prisoners = PrisonerRepository(fake_db).get_all()

    assert [p.prisoner_id for p in prisoners] == [1000, 1001]
    assert prisoners[1].full_name == "Jane Smith"


def test_update_missing_prisoner_raises_not_found(fake_db):
    fake_db.queue(rowcount=0)

    with pytest.raises(EntityNotFoundError) as exc_info:
        PrisonerRepository(fake_db).update(7, _prisoner())

    assert exc_info.value.entity_id == 7
    assert len(fake_db.calls) == 1


def test_update_is_a_full_replace_without_defaults(fake_db):
    fake_db.queue(rowcount=1).queue([_row(gender=None)])

    updated = PrisonerRepository(fake_db).update(1000, _prisoner(gender=None))

    params = fake_db.calls[0][1]
    assert params["prisoner_id"] == 1000
    assert params["gender"] is None
    assert params["release_date"] == "2030-04-30 00:00:00"
    assert updated.gender is None


def test_delete_missing_prisoner_raises_every_time(fake_db):
    fake_db.queue(rowcount=1).queue(rowcount=0).queue(rowcount=0)
    repo = PrisonerRepository(fake_db)

    repo.delete(1000)
    with pytest.raises(EntityNotFoundError):
        repo.delete(1000)
    with pytest.raises(EntityNotFoundError):
        repo.delete(1000)


def test_search_combines_given_criteria(fake_db):
    PrisonerRepository(fake_db).search(name="smi", offense="theft", parole_status="eligible")

    sql, params = fake_db.calls[0]
    flat = " ".join(sql.split())
    assert "first_name ILIKE '%%' || %(name)s || '%%'" in flat
    assert "last_name ILIKE '%%' || %(name)s || '%%'" in flat
    assert "offense ILIKE '%%' || %(offense)s || '%%'" in flat
    assert "UPPER(parole_status) = UPPER(%(parole_status)s)" in flat
    assert "cellblock_id =" not in flat
    assert params == {"name": "smi", "offense": "theft", "parole_status": "eligible"}


def test_search_treats_wildcards_as_literal_text(fake_db):
    PrisonerRepository(fake_db).search(name="_", offense="100%")

    sql, params = fake_db.calls[0]
    flat = " ".join(sql.split())
    assert flat.count("ESCAPE '\\'") == 3
    assert params == {"name": "\\_", "offense": "100\\%"}


def test_search_without_criteria_matches_everything(fake_db):
    fake_db.queue([_row()])

    result = PrisonerRepository(fake_db).search(name="", offense=None)

    sql, params = fake_db.calls[0]
    assert "ILIKE" not in sql
    assert params == {}
    assert len(result) == 1


def test_search_by_cell_block_is_exact(fake_db):
    PrisonerRepository(fake_db).search(cellblock_id=3)

    sql, params = fake_db.calls[0]
    assert "AND cellblock_id = %(cellblock_id)s" in sql
    assert params == {"cellblock_id": 3}


def test_set_parole_status_reports_whether_a_row_changed(fake_db):
    fake_db.queue(rowcount=1).queue(rowcount=0)
    repo = PrisonerRepository(fake_db)

    assert repo.set_parole_status(1000, "Approved") is True
    assert repo.set_parole_status(9999, "Approved") is False
    assert fake_db.calls[0][1] == {"parole_status": "Approved", "prisoner_id": 1000}
