"""Convert a resolved, merged API document into descriptor models.

Handles Swagger 2.0 documents and folds OpenAPI 3.x request bodies and
response content into the same shape, so the renderer only ever sees one
model.
"""

from urllib.parse import urlparse

from pydantic import ValidationError

from api_preview.errors import DocumentError
from api_preview.parser.models import (
    ApiDocument,
    EndpointDescriptor,
    ParameterDescriptor,
    ResponseDescriptor,
    SchemaProperty,
)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def normalize_document(doc: dict) -> ApiDocument:
    """Build an ApiDocument from a dereferenced, allOf-free document."""
    info = doc.get("info")
    paths = doc.get("paths")
    if not isinstance(info, dict):
        raise DocumentError("Document has no 'info' object")
    if not isinstance(paths, dict):
        raise DocumentError("Document has no 'paths' object")

    endpoints = []
    for path, path_item in paths.items():
        methods = [m for m in path_item or {} if m in HTTP_METHODS]
        if not methods:
            raise DocumentError(f"Path '{path}' declares no operations")
        for method in methods:
            endpoints.append(_parse_operation(str(path), method, path_item[method], path_item))

    try:
        return ApiDocument(
            title=_text(info.get("title")),
            description=_text(info.get("description")),
            base_path=_text(doc.get("basePath")) or _server_base_path(doc.get("servers")),
            schemes=doc.get("schemes"),
            endpoints=endpoints,
        )
    except ValidationError as e:
        raise DocumentError(f"Invalid document metadata: {e}") from e


def build_schema(raw: dict) -> SchemaProperty:
    """Build a SchemaProperty tree from a raw schema mapping.

    Children are built before their parents using an explicit stack, so
    nesting depth is not limited by the interpreter's recursion limit.
    """
    built: dict[int, SchemaProperty] = {}
    pending: set[int] = set()
    stack = [(raw, False)]
    while stack:
        node, expanded = stack.pop()
        if id(node) in built:
            continue
        if expanded:
            pending.discard(id(node))
            built[id(node)] = _schema_from_raw(node, built)
            continue
        pending.add(id(node))
        stack.append((node, True))
        for child in _schema_children(node):
            if id(child) in pending:
                raise DocumentError("Schema contains a circular reference")
            if id(child) not in built:
                stack.append((child, False))
    return built[id(raw)]


def _schema_children(node: dict) -> list[dict]:
    children = []
    properties = node.get("properties")
    if isinstance(properties, dict):
        children.extend(p for p in properties.values() if isinstance(p, dict))
    if isinstance(node.get("items"), dict):
        children.append(node["items"])
    return children


def _schema_from_raw(node: dict, built: dict[int, SchemaProperty]) -> SchemaProperty:
    properties = node.get("properties")
    if isinstance(properties, dict):
        children = {str(name): built[id(p)] for name, p in properties.items() if isinstance(p, dict)}
    else:
        children = {}
    items = node.get("items")
    required = node.get("required")

    return SchemaProperty(
        type=_type_label(node.get("type")),
        description=_text(node.get("description")),
        properties=children,
        items=built[id(items)] if isinstance(items, dict) else None,
        required=[str(n) for n in required] if isinstance(required, list) else [],
        example=node.get("example"),
    )


def _parse_operation(path: str, method: str, operation: dict, path_item: dict) -> EndpointDescriptor:
    where = f"{method.upper()} {path}"
    if not isinstance(operation, dict):
        raise DocumentError(f"{where}: operation must be a mapping")

    fields = {
        "path": path,
        "method": method,
        "operation_id": _text(operation.get("operationId")),
        "description": _text(operation.get("description") or operation.get("summary")),
        "responses": _parse_responses(operation.get("responses") or {}, where),
        "schemes": operation.get("schemes"),
    }
    if "tags" in operation:
        tags = operation["tags"]
        # YAML reads unquoted tags such as 2024 as int
        fields["tags"] = [_text(t) for t in tags] if isinstance(tags, list) else tags

    raw_params = _merge_path_parameters(path_item.get("parameters"), operation.get("parameters"))
    body = _parse_request_body(operation.get("requestBody"))
    if raw_params is not None or body is not None:
        params = [_parse_parameter(p, where) for p in raw_params or []]
        if body is not None:
            params.append(body)
        fields["parameters"] = params

    try:
        return EndpointDescriptor(**fields)
    except ValidationError as e:
        raise DocumentError(f"{where}: {e}") from e


def _merge_path_parameters(shared: list | None, own: list | None) -> list | None:
    """Path-item parameters apply unless the operation redefines (name, in)."""
    if shared is None and own is None:
        return None
    own = own or []
    overridden = {(p.get("name"), p.get("in")) for p in own if isinstance(p, dict)}
    inherited = [p for p in shared or [] if isinstance(p, dict) and (p.get("name"), p.get("in")) not in overridden]
    return inherited + own


def _parse_parameter(p: dict, where: str) -> ParameterDescriptor:
    if not isinstance(p, dict):
        raise DocumentError(f"{where}: parameter must be a mapping")
    schema = p.get("schema") if isinstance(p.get("schema"), dict) else None
    param_type = p.get("type")
    if param_type is None and schema is not None and p.get("in") != "body":
        param_type = schema.get("type")

    try:
        return ParameterDescriptor(
            name=_text(p.get("name")),
            location=p.get("in"),
            param_type=_text(param_type),
            description=_text(p.get("description")),
            required=bool(p.get("required", False)),
            schema_=build_schema(schema) if schema is not None else None,
        )
    except ValidationError as e:
        raise DocumentError(f"{where}: invalid parameter {p.get('name')!r}: {e}") from e


def _parse_request_body(body: dict | None) -> ParameterDescriptor | None:
    if not body:
        return None
    schema = _content_schema(body.get("content"))
    return ParameterDescriptor(
        name="body",
        location="body",
        description=_text(body.get("description")),
        required=bool(body.get("required", False)),
        schema_=build_schema(schema) if schema is not None else None,
    )


def _parse_responses(responses: dict, where: str) -> dict[str, ResponseDescriptor]:
    if not isinstance(responses, dict):
        raise DocumentError(f"{where}: 'responses' must be a mapping")
    result = {}
    for status_code, resp in responses.items():
        if resp is None:
            resp = {}
        if not isinstance(resp, dict):
            raise DocumentError(f"{where}: response {status_code} must be a mapping")
        schema = resp.get("schema")
        if not isinstance(schema, dict):
            schema = _content_schema(resp.get("content"))
        code = str(status_code)  # YAML reads unquoted 200 as int
        result[code] = ResponseDescriptor(
            status_code=code,
            description=_text(resp.get("description")),
            schema_=build_schema(schema) if schema is not None else None,
        )
    return result


def _content_schema(content: dict | None) -> dict | None:
    """Pick the schema of an OpenAPI 3 content map, preferring JSON.

    A media-type level ``example`` is copied onto the schema when the
    schema has none of its own.
    """
    if not isinstance(content, dict) or not content:
        return None
    media = content.get("application/json")
    if not isinstance(media, dict):
        # Fallback: first available media type
        media = next(iter(content.values()))
    if not isinstance(media, dict) or not isinstance(media.get("schema"), dict):
        return None
    schema = media["schema"]
    if "example" in media and "example" not in schema:
        schema = {**schema, "example": media["example"]}
    return schema


def _server_base_path(servers: list | None) -> str:
    if not servers or not isinstance(servers[0], dict):
        return ""
    return urlparse(_text(servers[0].get("url"))).path.rstrip("/")


def _type_label(value) -> str:
    if isinstance(value, list):
        return " | ".join(str(v) for v in value) or "Object"
    return _text(value) or "Object"


def _text(value) -> str:
    return "" if value is None else str(value)
