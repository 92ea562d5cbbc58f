"""Recursive request parameter validation against schema nodes.

validate() walks a JSON-compatible value alongside its schema and returns the
first problem it finds as an error record:

    {"status": 400, "name": "Request Error - ...", "message": "..."}

or None when the value satisfies the schema. Failures are data, not
exceptions; only a value that could never come out of a JSON parser raises.
"""

import json

from services.errors import ShouldBeUnreachableError
from services.schema import (
    PRIMITIVE_TYPES,
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    OverloadSchema,
    SchemaNode,
    TupleSchema,
)

UNNAMED_PARAM = "[root or array member]"

MISSING_REQUIRED_PARAM = "Request Error - Missing Required Parameter"
WRONG_PARAM_NAME = "Request Error - Invalid Parameter Name"
WRONG_PARAM_TYPE = "Request Error - Incorrect Parameter Type"
INVALID_PARAM_VALUE = "Request Error - Incorrect Parameter Value"

# Errors that only disqualify one overload alternative
_OVERLOAD_VOTES = (WRONG_PARAM_TYPE, INVALID_PARAM_VALUE)


class _Missing:
    """Marker for a key that is absent from its parent object."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _integral_floats_as_ints(value):
    # 1.0 and 1 are the same JSON number; render both as 1
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list | tuple):
        return [_integral_floats_as_ints(v) for v in value]
    if isinstance(value, dict):
        return {k: _integral_floats_as_ints(v) for k, v in value.items()}
    return value


def _to_json(value) -> str:
    return json.dumps(_integral_floats_as_ints(value), separators=(",", ":"), ensure_ascii=False)


def _display(value) -> str:
    """Render a value for an error message: strings verbatim, the rest as JSON."""
    if isinstance(value, str):
        return value
    return _to_json(value)


def missing_required_param(param_name: str) -> dict:
    return {
        "status": 400,
        "name": MISSING_REQUIRED_PARAM,
        "message": (
            f"The parameter '{param_name}' was missing from the request, "
            "but is required for this endpoint."
        ),
    }


def wrong_param_name(param_name: str) -> dict:
    return {
        "status": 400,
        "name": WRONG_PARAM_NAME,
        "message": f"The parameter with name '{param_name}' was unexpected in this request.",
    }


def wrong_param_type(param_name: str, param_type: str, expected_type: str) -> dict:
    return {
        "status": 400,
        "name": WRONG_PARAM_TYPE,
        "message": (
            f"The parameter '{param_name}' has the type '{param_type}', "
            f"but was expected to have the type '{expected_type}' instead."
        ),
    }


def invalid_param_value(param_name: str, value, expected_values) -> dict:
    return {
        "status": 400,
        "name": INVALID_PARAM_VALUE,
        "message": (
            f"The parameter '{param_name}' with the value '{_display(value)}' was not found "
            f"in the expected value list: '{_to_json(list(expected_values))}'"
        ),
    }


def classify(value) -> str:
    """Like JavaScript's typeof, but with separate names for arrays, objects and null."""
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int | float):
        return "number"
    if value is None:
        return "null"
    if isinstance(value, list | tuple):
        return "array"
    if isinstance(value, dict):
        return "object"

    raise ShouldBeUnreachableError(
        f"A value of type {type(value).__name__} could not have been produced by parsing JSON."
    )


def _strictly_equal(a, b) -> bool:
    return classify(a) == classify(b) and a == b


def describe_type(schema: SchemaNode) -> str:
    """Type text used for overload mismatches, e.g. ``array(number)``."""
    if isinstance(schema, ArraySchema):
        return f"array({describe_type(schema.array_type)})"
    if isinstance(schema, TupleSchema):
        return f"tuple({', '.join(describe_type(t) for t in schema.tuple_types)})"
    return schema.type


def _type_matches(value_type: str, schema: SchemaNode) -> bool:
    if schema.type == "primitive":
        return value_type in PRIMITIVE_TYPES
    if schema.type == "tuple":
        return value_type == "array"
    return value_type == schema.type


def validate(value, schema: SchemaNode) -> dict | None:
    """Return the first error record for *value* against *schema*, or None.

    Pass MISSING as *value* when the key was absent from its parent object.
    """
    name = schema.param or UNNAMED_PARAM

    if value is MISSING:
        if schema.required:
            return missing_required_param(name)
        return None

    if isinstance(schema, EnumSchema):
        if not any(_strictly_equal(value, allowed) for allowed in schema.values):
            return invalid_param_value(name, value, schema.values)
        return None

    value_type = classify(value)

    if isinstance(schema, OverloadSchema):
        for alternative in schema.types:
            error = validate(value, alternative)
            if error is None:
                return None
            if error["name"] not in _OVERLOAD_VOTES:
                return error
        expected = " | ".join(describe_type(t) for t in schema.types)
        return wrong_param_type(name, value_type, expected)

    if not _type_matches(value_type, schema):
        return wrong_param_type(name, value_type, schema.type)

    if isinstance(schema, TupleSchema):
        for i, position in enumerate(schema.tuple_types):
            if i >= len(value):
                return missing_required_param(f"{name} tuple, index {i}")
            error = validate(value[i], position)
            if error:
                return error
        return None

    if isinstance(schema, ArraySchema):
        for element in value:
            error = validate(element, schema.array_type)
            if error:
                return error
        return None

    if isinstance(schema, ObjectSchema):
        # Missing required keys are reported before unexpected ones
        for prop in schema.properties:
            if prop.required and prop.param not in value:
                return missing_required_param(prop.param)

        for key, nested_value in value.items():
            prop = schema.find_property(key)
            if prop is None:
                return wrong_param_name(key)
            error = validate(nested_value, prop)
            if error:
                return error

    return None


def validate_request_params(params: dict, properties: list[SchemaNode]) -> dict | None:
    """Validate top-level request params against a flat list of property schemas."""
    return validate(params, ObjectSchema(properties=tuple(properties)))
