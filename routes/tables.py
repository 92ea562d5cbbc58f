"""Table endpoints: summarize rows, flatten query results, decode posted list fields."""

from flask import Blueprint, jsonify, request

from request_validation import restlet_response, validate_body
from services.debug_log import debug_log
from services.errors import UnexpectedDuplicateError, WrongTypeError
from services.ids import field_id
from services.query import parse_list_param, results_as_table
from services.schema import parse_schema
from services.table2d import Table2d

bp = Blueprint("tables", __name__)

_STRINGS = {"type": "array", "array_type": {"type": "string"}}
_COLUMN_LIST = {"type": "overload", "types": [{"type": "string"}, _STRINGS]}

SUMMARIZE_SCHEMA = parse_schema(
    {
        "type": "object",
        "required": True,
        "properties": [
            {"param": "columns", "required": True, **_STRINGS},
            {
                "param": "rows",
                "required": True,
                "type": "array",
                "array_type": {"type": "array", "array_type": {"type": "primitive"}},
            },
            {"param": "group", "required": True, **_COLUMN_LIST},
            {"param": "sum", **_COLUMN_LIST},
            {"param": "count", **_COLUMN_LIST},
            {"param": "format", "values": ["objects", "table"]},
        ],
    }
)

RESULTS_SCHEMA = parse_schema(
    {
        "type": "object",
        "required": True,
        "properties": [
            {
                "param": "result_sets",
                "required": True,
                "type": "array",
                "array_type": {
                    "type": "object",
                    "properties": [
                        {
                            "param": "columns",
                            "required": True,
                            "type": "array",
                            "array_type": {
                                "type": "object",
                                "properties": [
                                    {"param": "field_id", "type": "string", "required": True},
                                    {"param": "label", "type": "string"},
                                ],
                            },
                        },
                        {
                            "param": "results",
                            "required": True,
                            "type": "array",
                            "array_type": {
                                "type": "object",
                                "properties": [
                                    {
                                        "param": "values",
                                        "required": True,
                                        "type": "array",
                                        "array_type": {"type": "primitive"},
                                    },
                                ],
                            },
                        },
                    ],
                },
            },
            {
                "param": "rename",
                "type": "array",
                "array_type": {
                    "type": "tuple",
                    "tuple_types": [{"type": "string"}, {"type": "string"}],
                },
            },
        ],
    }
)


def _as_list(columns) -> list[str]:
    if columns is None:
        return []
    return [columns] if isinstance(columns, str) else list(columns)


def _table_body(table: Table2d, fmt: str = "table") -> dict:
    if fmt == "objects":
        return {"objects": table.objects()}
    return {"columns": table.columns, "rows": table.rows}


@debug_log("tables")
def summarize_payload(payload: dict) -> Table2d:
    table = Table2d(payload["columns"], payload["rows"])
    return table.summarize(
        _as_list(payload["group"]),
        _as_list(payload.get("sum")),
        _as_list(payload.get("count")),
    )


@bp.route("/api/tables/summarize", methods=["POST"])
@validate_body(SUMMARIZE_SCHEMA)
def summarize(payload):
    """Group rows and sum/count columns. Body: {columns, rows, group, sum?, count?, format?}."""
    width = len(payload["columns"])
    if any(len(row) != width for row in payload["rows"]):
        return jsonify({"error": f"Every row must have {width} cells"}), 400

    summary = summarize_payload(payload)
    return restlet_response(_table_body(summary, payload.get("format", "table")))


@bp.route("/api/tables/results", methods=["POST"])
@validate_body(RESULTS_SCHEMA)
def flatten_results(payload):
    """Flatten paged query result sets into one table. Body: {result_sets, rename?}."""
    rename = {old: new for old, new, *_ in payload.get("rename", [])}
    try:
        table = results_as_table(payload["result_sets"], rename)
    except UnexpectedDuplicateError as e:
        return jsonify({"error": str(e)}), 400
    return restlet_response(_table_body(table))


@bp.route("/api/tables/list/<slug>", methods=["POST"])
def decode_list_field(slug):
    """Decode a form-posted list field named custpage_fld_<slug> into rows."""
    try:
        param = field_id(slug)
    except WrongTypeError as e:
        return jsonify({"error": str(e)}), 400

    if f"{param}fields" not in request.form:
        return jsonify({"error": f"Missing form field: {param}fields"}), 400

    table = parse_list_param(request.form.to_dict(), param)
    return restlet_response(_table_body(table, request.args.get("format", "table")))
