"""Tests for class listings and the reference table view."""

import pytest

from tolcalc.core.knowledge.tolerance import (
    FIT_RANGES,
    GENERAL_TOLERANCE_TABLE,
    SHAFT_FIT_DATA,
    FitDeviation,
    Mode,
    ToleranceClass,
    format_cell,
    get_reference_table,
    list_fit_classes,
    list_general_classes,
)


def test_list_general_classes_order():
    assert list_general_classes() == [ToleranceClass.F, ToleranceClass.M, ToleranceClass.C, ToleranceClass.V]


def test_list_fit_classes_natural_order():
    shafts = list_fit_classes("shaft")
    assert shafts.index("h9") < shafts.index("h11")
    assert shafts[:4] == ["d9", "e8", "f7", "g6"]
    assert sorted(shafts) != shafts  # plain sort would put h11 before h5


def test_list_fit_classes_holes():
    holes = list_fit_classes("hole")
    assert holes == ["E9", "F7", "F8", "G7", "H6", "H7", "H8", "H9", "H11", "JS7", "K7", "M7", "N7", "P7"]


def test_general_reference_table():
    table = get_reference_table(Mode.GENERAL)

    assert table.category is None
    assert table.headers[0] == "0 - 3"
    assert len(table.headers) == len(GENERAL_TOLERANCE_TABLE)
    assert [row.label for row in table.rows] == ["f", "m", "c", "v"]

    v_row = table.rows[3]
    assert v_row.cells[0] is None
    assert format_cell(v_row.cells[0]) == "-"
    assert format_cell(v_row.cells[1]) == "±0.5"


def test_fit_reference_table():
    table = get_reference_table("fit", "shaft")

    assert len(table.headers) == len(FIT_RANGES)
    assert [row.label for row in table.rows] == list_fit_classes("shaft")
    h6 = next(row for row in table.rows if row.label == "h6")
    assert h6.cells == SHAFT_FIT_DATA["h6"]
    assert format_cell(h6.cells[2]) == "0/-9"


def test_fit_reference_table_requires_category():
    with pytest.raises(ValueError):
        get_reference_table("fit")


def test_reference_table_to_dict():
    data = get_reference_table("fit", "hole").to_dict()
    assert data["mode"] == "fit"
    assert data["category"] == "hole"
    h7 = next(row for row in data["rows"] if row["label"] == "H7")
    assert h7["values"][4] == {"upper": 21, "lower": 0}
    assert h7["text"][4] == "21/0"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "-"),
        (0.05, "±0.05"),
        (2, "±2"),
        (FitDeviation(-7, -20), "-7/-20"),
        (FitDeviation(4.5, -4.5), "4.5/-4.5"),
    ],
)
def test_format_cell(value, expected):
    assert format_cell(value) == expected
