"""Flatten ``allOf`` composition into plain schemas.

Runs after reference resolution. Each ``allOf`` list is folded into the
schema that holds it: property mappings are combined, ``required`` lists
are unioned, and for any other annotation present in more than one part
the first value seen wins (the holding schema first, then the ``allOf``
members in order). A property declared by several parts is merged the
same way. Example payloads and ``x-`` extensions pass through untouched.
"""

from typing import Any

OPAQUE_KEYS = ("example", "examples")


def merge_all_of(node: Any) -> Any:
    """Return a copy of ``node`` with every ``allOf`` list flattened."""
    if isinstance(node, list):
        return [merge_all_of(v) for v in node]
    if not isinstance(node, dict):
        return node

    merged = {k: v if _is_opaque(k) else _merge_value(k, v) for k, v in node.items()}
    parts = merged.get("allOf")
    if not isinstance(parts, list):
        return merged

    del merged["allOf"]
    for part in parts:
        if isinstance(part, dict):
            merged = _merge_schemas(merged, part)
    return merged


def _merge_value(key: str, value: Any) -> Any:
    if key == "properties" and isinstance(value, dict):
        # keys here are property names, not schema keywords
        return {name: merge_all_of(schema) for name, schema in value.items()}
    return merge_all_of(value)


def _is_opaque(key: Any) -> bool:
    return key in OPAQUE_KEYS or (isinstance(key, str) and key.startswith("x-"))


def _merge_schemas(base: dict, other: dict) -> dict:
    result = dict(base)
    for key, value in other.items():
        if key not in result:
            result[key] = value
        elif key == "properties" and isinstance(value, dict) and isinstance(result[key], dict):
            result[key] = _merge_properties(result[key], value)
        elif key == "required" and isinstance(value, list) and isinstance(result[key], list):
            result[key] = result[key] + [name for name in value if name not in result[key]]
        elif key == "items" and isinstance(value, dict) and isinstance(result[key], dict):
            result[key] = _merge_schemas(result[key], value)
        # any other conflicting annotation keeps the first value
    return result


def _merge_properties(base: dict, other: dict) -> dict:
    result = dict(base)
    for name, schema in other.items():
        if name in result and isinstance(result[name], dict) and isinstance(schema, dict):
            result[name] = _merge_schemas(result[name], schema)
        elif name not in result:
            result[name] = schema
    return result
