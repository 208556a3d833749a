from __future__ import annotations

import pytest

from inventory_dashboard.coercion import as_records, first_present, first_text, get_field, safe_number
from inventory_dashboard.schemas import ConsumptionSlice


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 0.0),
        ("", 0.0),
        ("   ", 0.0),
        ("abc", 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (7, 7.0),
        (2.5, 2.5),
        ("12", 12.0),
        (" 3.75 ", 3.75),
        ("12 kg", 12.0),
        ("-4", -4.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ([1], 0.0),
    ],
)
def test_safe_number(value, expected: float) -> None:
    assert safe_number(value) == expected


def test_field_helpers_accept_mappings_and_objects() -> None:
    row = ConsumptionSlice(name="Rice", value=3)
    assert get_field(row, "name") == "Rice"
    assert get_field({"name": "Oil"}, "name") == "Oil"
    assert get_field(42, "name", "fallback") == "fallback"

    record = {"quantity": None, "qty": 0, "name": "  ", "item": " Dal "}
    assert first_present(record, ("quantity", "qty"), default=1) == 0
    assert first_present({}, ("quantity", "qty"), default=1) == 1
    assert first_text(record, ("name", "item")) == "Dal"
    assert first_text(record, ("name",), default="Unknown") == "Unknown"


def test_as_records() -> None:
    assert as_records([1, 2]) == [1, 2]
    assert as_records(({"a": 1},)) == [{"a": 1}]
    assert as_records(None) == []
    assert as_records({"data": []}) == []
