"""Unit tests for services/query.py: result set and list param shaping."""

import pytest

from services.errors import UnexpectedDuplicateError
from services.query import (
    COL_DELIMITER,
    ROW_DELIMITER,
    get_columns,
    parse_list_param,
    results_as_table,
)

PAGE_1 = {
    "columns": [{"field_id": "id"}, {"field_id": "companyname", "label": "Company"}],
    "results": [{"values": [1, "Acme"]}, {"values": [2, "Globex"]}],
}
PAGE_2 = {
    "columns": [{"field_id": "id"}, {"field_id": "companyname", "label": "Company"}],
    "results": [{"values": [3, "Initech"]}],
}


def test_get_columns_in_order():
    columns = get_columns([PAGE_1])
    assert list(columns) == ["id", "companyname"]
    assert columns["companyname"]["label"] == "Company"


def test_get_columns_empty():
    assert get_columns([]) == {}


def test_get_columns_duplicate_raises():
    page = {"columns": [{"field_id": "id"}, {"field_id": "id"}], "results": []}
    with pytest.raises(UnexpectedDuplicateError, match="'id'"):
        get_columns([page])


def test_results_as_table_flattens_pages():
    table = results_as_table([PAGE_1, PAGE_2])
    assert table.columns == ["id", "companyname"]
    assert [row[1] for row in table] == ["Acme", "Globex", "Initech"]


def test_results_as_table_renames():
    table = results_as_table([PAGE_1], {"companyname": "name"})
    assert table.columns == ["id", "name"]
    assert table.get(0, "name") == "Acme"


def test_parse_list_param():
    params = {
        "custpage_fld_linesfields": COL_DELIMITER.join(["item", "qty"]),
        "custpage_fld_linesdata": ROW_DELIMITER.join(
            [COL_DELIMITER.join(["A-1", "2"]), COL_DELIMITER.join(["B-7", "5"])]
        ),
    }
    table = parse_list_param(params, "custpage_fld_lines")
    assert table.columns == ["item", "qty"]
    assert table.rows == [["A-1", "2"], ["B-7", "5"]]


def test_parse_list_param_without_rows():
    table = parse_list_param({"xfields": "a\u0001b", "xdata": ""}, "x")
    assert table.columns == ["a", "b"]
    assert table.rows == []
