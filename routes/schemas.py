"""Schema endpoints: list the configured request schemas, validate payloads against one."""

import logging

from flask import Blueprint, jsonify

from config import SCHEMA_DIR
from request_validation import read_payload, restlet_response
from services.errors import log_and_suppress_error
from services.schema import SchemaError, load_schema_dir
from services.validator import validate

log = logging.getLogger(__name__)

bp = Blueprint("schemas", __name__)


def _load_schemas():
    """Returns (schemas, None) on success, (None, error_response) on a broken schema file."""
    try:
        return load_schema_dir(SCHEMA_DIR), None
    except (SchemaError, OSError) as e:
        log_and_suppress_error("Loading request schemas", e)
        return None, (jsonify({"error": f"Could not load schemas: {e}"}), 500)


@bp.route("/api/schemas")
def list_schemas():
    """Names of all schemas found in the schema directory."""
    schemas, err = _load_schemas()
    if err:
        return err
    return jsonify({"schemas": sorted(schemas)})


@bp.route("/api/validate/<name>", methods=["POST"])
def validate_payload(name):
    """Validate the request body against the named schema."""
    schemas, err = _load_schemas()
    if err:
        return err

    schema = schemas.get(name)
    if schema is None:
        return jsonify({"error": f"Unknown schema: {name}"}), 404

    error = validate(read_payload(), schema)
    if error:
        return jsonify(error), error["status"]
    return restlet_response({"valid": True})
