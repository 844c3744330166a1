from models.defaults import FIELD_DEFAULTS, apply_defaults


def test_prisoner_defaults_fill_missing_fields():
    values = {"first_name": "Ann", "gender": None, "behavior_rating": "", "parole_status": "Pending"}

    merged = apply_defaults("prisoner", values)

    assert merged["gender"] == "Male"
    assert merged["behavior_rating"] == 3
    assert merged["parole_status"] == "Pending"
    assert merged["first_name"] == "Ann"


def test_apply_defaults_does_not_modify_input():
    values = {"occupancy": None}
    apply_defaults("cell", values)
    assert values == {"occupancy": None}


def test_unknown_entity_has_no_defaults():
    assert apply_defaults("parole", {"status": None}) == {"status": None}


def test_defaults_table():
    assert FIELD_DEFAULTS["prisoner"] == {
        "gender": "Male",
        "behavior_rating": 3,
        "parole_status": "Ineligible",
    }
    assert FIELD_DEFAULTS["cell_block"] == {"current_capacity": 0}
