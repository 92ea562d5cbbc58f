"""RESTlet-style request handling for Flask routes.

Provides a route decorator that validates the JSON body against a schema
before the view runs, and a helper for the success envelope:

    {"status": 200, "data": {...}}

Validation errors are returned verbatim as {"status", "name", "message"}.
"""

import logging
from functools import wraps

from flask import jsonify, request

from services.schema import SchemaNode
from services.validator import MISSING, validate

log = logging.getLogger(__name__)


def restlet_response(data, status: int = 200):
    """Wrap *data* in the success envelope. Returns a Flask (response, status) pair."""
    return jsonify({"status": status, "data": data}), status


def read_payload():
    """Parsed JSON body, or MISSING when the request has no body at all."""
    if not request.get_data(cache=True):
        return MISSING
    return request.get_json(silent=True, force=True)


def validate_body(schema: SchemaNode):
    """Flask route decorator: rejects requests whose body doesn't match *schema*.

    The parsed body is passed to the view as the ``payload`` keyword argument.
    """

    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            payload = read_payload()
            error = validate(payload, schema)
            if error:
                log.info("%s %s rejected: %s", request.method, request.path, error["message"])
                return jsonify(error), error["status"]
            return f(*args, payload=payload, **kwargs)

        return decorated

    return decorator
