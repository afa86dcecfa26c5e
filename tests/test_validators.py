# /tests/test_validators.py

from datetime import date

import pytest

from school_console.models.resource_model import ResourceType
from school_console.services.entity_forms import build_entity_form
from school_console.services.form_helpers import normalizers
from school_console.services.form_helpers.validators import (
    error_message, max_value, min_length, min_value, one_of, pattern, required,
)


@pytest.mark.parametrize("value", [None, "", "   ", []])
def test_required_rejects_empty_values(value):
    assert required()(value) == {"required": True}


def test_other_validators_let_empty_input_through():
    for validator in (min_value(1), max_value(5), min_length(3), pattern(r"^[A-Z]$"), one_of(("Fall",))):
        assert validator("") is None
        assert validator(None) is None


def test_one_of():
    validator = one_of(("Male", "Female", "Other"))
    assert validator("Female") is None
    assert validator("Unknown") == {"oneOf": {"allowed": ["Male", "Female", "Other"], "actual": "Unknown"}}
    assert error_message("oneOf", validator("Unknown")["oneOf"]) == "Please select a valid option"


def test_max_value_bound_is_read_on_every_check():
    bound = {"year": 2025}
    validator = max_value(lambda: bound["year"])

    assert validator(2026) == {"max": {"max": 2025, "actual": 2026}}
    bound["year"] = 2026
    assert validator(2026) is None


def test_establishment_year_is_bounded_by_the_current_year():
    form = build_entity_form(ResourceType.DEPARTMENT)
    this_year = date.today().year

    form.set_value("establishmentYear", this_year)
    assert "establishmentYear" not in form.errors()

    form.set_value("establishmentYear", this_year + 1)
    assert form.errors()["establishmentYear"] == {"max": {"max": this_year, "actual": this_year + 1}}


def test_select_fields_reject_unknown_options():
    form = build_entity_form(ResourceType.COURSE)
    form.set_value("semester", "Autumn")
    form.set_value("status", "Archived")
    errors = form.errors()
    assert "oneOf" in errors["semester"]
    assert "oneOf" in errors["status"]

    days = form.section("schedule.days")
    days.toggle("Funday")
    assert "oneOf" in form.errors()["schedule.days.0"]


def test_names_are_trimmed_on_output():
    assert normalizers.strip("  Asha ") == "Asha"
    assert normalizers.strip(3) == 3

    form = build_entity_form(ResourceType.COURSE)
    form.patch({"courseName": "  Algorithms  ", "instructor": {"name": " Dr. Rao "}})
    value = form.to_value()
    assert value["courseName"] == "Algorithms"
    assert value["instructor"]["name"] == "Dr. Rao"
