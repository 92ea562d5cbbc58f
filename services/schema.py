"""Request parameter schema nodes and loaders.

A schema is a tree of frozen dataclasses, one class per node kind:

    PrimitiveSchema  type: string | number | boolean | null | primitive
    ObjectSchema     type: object     properties: named child nodes
    ArraySchema      type: array      array_type: node for every element
    TupleSchema      type: tuple      tuple_types: node per position
    EnumSchema       type: enum       values: allowed JSON literals
    OverloadSchema   type: overload   types: alternative nodes

Schemas are usually written as YAML and turned into nodes by parse_schema().
"""

import os
from dataclasses import dataclass

import yaml

from services.errors import ToolkitError

PRIMITIVE_TYPES = ("string", "number", "boolean", "null")
_SCHEMA_EXTENSIONS = (".yaml", ".yml", ".json")


class SchemaError(ToolkitError):
    """A schema definition is malformed."""


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    param: str | None = None
    required: bool = False


@dataclass(frozen=True, kw_only=True)
class PrimitiveSchema(SchemaNode):
    type: str


@dataclass(frozen=True, kw_only=True)
class ObjectSchema(SchemaNode):
    properties: tuple[SchemaNode, ...] = ()

    type = "object"

    def find_property(self, name: str) -> SchemaNode | None:
        for prop in self.properties:
            if prop.param == name:
                return prop
        return None


@dataclass(frozen=True, kw_only=True)
class ArraySchema(SchemaNode):
    array_type: SchemaNode

    type = "array"


@dataclass(frozen=True, kw_only=True)
class TupleSchema(SchemaNode):
    tuple_types: tuple[SchemaNode, ...]

    type = "tuple"


@dataclass(frozen=True, kw_only=True)
class EnumSchema(SchemaNode):
    values: tuple

    type = "enum"


@dataclass(frozen=True, kw_only=True)
class OverloadSchema(SchemaNode):
    types: tuple[SchemaNode, ...]

    type = "overload"


def _child_list(data: dict, *keys) -> list:
    for key in keys:
        if key in data:
            children = data[key]
            if not isinstance(children, list):
                raise SchemaError(f"'{key}' must be a list")
            return children
    raise SchemaError(f"Schema of type {data.get('type')!r} needs '{keys[0]}'")


def parse_schema(data: dict) -> SchemaNode:
    """Build a schema node tree from a plain dict (as loaded from JSON or YAML)."""
    if not isinstance(data, dict):
        raise SchemaError(f"Schema node must be a mapping, got {type(data).__name__}")

    param = data.get("param")
    if param is not None and not isinstance(param, str):
        raise SchemaError(f"'param' must be a string, got {param!r}")
    required = data.get("required", False)
    if not isinstance(required, bool):
        raise SchemaError(f"'required' must be true or false, got {required!r}")
    common = {"param": param, "required": required}

    # A bare value list is shorthand for an enum
    kind = data.get("type", "enum" if "values" in data else None)

    if kind in PRIMITIVE_TYPES or kind == "primitive":
        return PrimitiveSchema(type=kind, **common)

    if kind == "object":
        properties = tuple(parse_schema(p) for p in data.get("properties") or [])
        seen = set()
        for prop in properties:
            if prop.param is None:
                raise SchemaError("Object properties need a 'param' name")
            if prop.param in seen:
                raise SchemaError(f"Duplicate property {prop.param!r}")
            seen.add(prop.param)
        return ObjectSchema(properties=properties, **common)

    if kind == "array":
        element = data.get("array_type", data.get("arrayType"))
        if element is None:
            raise SchemaError("Schema of type 'array' needs 'array_type'")
        return ArraySchema(array_type=parse_schema(element), **common)

    if kind == "tuple":
        positions = _child_list(data, "tuple_types", "tupleTypes")
        return TupleSchema(tuple_types=tuple(parse_schema(p) for p in positions), **common)

    if kind == "enum":
        values = _child_list(data, "values")
        for v in values:
            if v is not None and not isinstance(v, str | int | float | bool):
                raise SchemaError(f"Enum values must be JSON literals, got {v!r}")
        return EnumSchema(values=tuple(values), **common)

    if kind == "overload":
        alternatives = _child_list(data, "types")
        if not alternatives:
            raise SchemaError("Schema of type 'overload' needs at least one alternative")
        return OverloadSchema(types=tuple(parse_schema(t) for t in alternatives), **common)

    raise SchemaError(f"Unknown schema type: {kind!r}")


def load_schema(path: str) -> SchemaNode:
    """Read a YAML/JSON schema file and parse it."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise SchemaError(f"Could not parse schema file {path}: {e}") from e
    return parse_schema(data)


def load_schema_dir(schema_dir: str) -> dict[str, SchemaNode]:
    """Load every schema file in *schema_dir*, keyed by file stem."""
    schemas: dict[str, SchemaNode] = {}
    if not os.path.isdir(schema_dir):
        return schemas

    for fname in sorted(os.listdir(schema_dir)):
        stem, ext = os.path.splitext(fname)
        if ext.lower() not in _SCHEMA_EXTENSIONS or stem.startswith("."):
            continue
        schemas[stem] = load_schema(os.path.join(schema_dir, fname))
    return schemas
