"""Shaping of query results and posted list parameters into tables.

Result sets follow the host query API's shape:

    {"columns": [{"field_id": "id"}, ...], "results": [{"values": [...]}, ...]}

Paged queries produce one result set per page.
"""

from services.errors import UnexpectedDuplicateError
from services.table2d import Table2d

COL_DELIMITER = "\u0001"
ROW_DELIMITER = "\u0002"


def get_columns(result_sets: list[dict]) -> dict[str, dict]:
    """Return {field_id: column} from the first result set, in column order."""
    columns: dict[str, dict] = {}
    if not result_sets:
        return columns

    for col in result_sets[0].get("columns") or []:
        field_id = col["field_id"]
        if field_id in columns:
            raise UnexpectedDuplicateError("query result column id", field_id)
        columns[field_id] = col
    return columns


def results_as_table(result_sets: list[dict], rename_columns: dict[str, str] | None = None) -> Table2d:
    """Flatten every page of results into a single Table2d."""
    rename_columns = rename_columns or {}
    labels = [rename_columns.get(field_id, field_id) for field_id in get_columns(result_sets)]
    rows = [result["values"] for page in result_sets for result in page.get("results") or []]
    return Table2d(labels, rows)


def parse_list_param(params: dict[str, str], slug: str) -> Table2d:
    """Decode a form-posted list field (``<slug>fields`` + ``<slug>data``) into a table."""
    columns = params[f"{slug}fields"].split(COL_DELIMITER)
    raw_rows = params.get(f"{slug}data", "")
    rows = [row.split(COL_DELIMITER) for row in raw_rows.split(ROW_DELIMITER)] if raw_rows else []
    return Table2d(columns, rows)
