"""Request and response sections of an endpoint."""

import json
from html import escape
from typing import Any

from api_preview.errors import RenderError
from api_preview.parser.models import EndpointDescriptor, SchemaProperty
from api_preview.render.properties import render_structure
from api_preview.render.table import render_table

PARAMETER_HEADINGS = ["Parameter", "Type", "Description", "Required"]
RESPONSE_HEADINGS = ["HTTP Code", "Description"]

PARAMETER_GROUPS = (
    ("path", "Path Parameters"),
    ("query", "Query Parameters"),
    ("header", "Header Parameters"),
)


def format_example(value: Any) -> str:
    """Serialize an example payload as 4-space indented JSON.

    Raises RenderError for values without a deterministic JSON form,
    such as timestamps or NaN.
    """
    try:
        return json.dumps(value, indent=4, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise RenderError(f"Example is not serializable as JSON: {e}") from e


def render_parameters(endpoint: EndpointDescriptor) -> str:
    """Render parameter tables plus the request body structure and example."""
    dom = []
    for location, title in PARAMETER_GROUPS:
        params = [p for p in endpoint.parameters if p.location == location]
        if params:
            rows = [[p.name, p.param_type, p.description, p.required] for p in params]
            dom.append(f"""
        <div>
          <h3>{title}</h3>
          {render_table(PARAMETER_HEADINGS, rows)}
        </div>
      """)

    body_params = [p for p in endpoint.parameters if p.location == "body"]
    if body_params and body_params[0].schema_ is not None:
        # at most one body parameter is meaningful
        dom.extend(_body_blocks(body_params[0].schema_, "Request"))

    return "\n".join(dom)


def render_responses(endpoint: EndpointDescriptor) -> str:
    """Render the 200 response body and the response code summary."""
    if not endpoint.responses:
        return ""

    dom = []
    success = endpoint.responses.get("200")
    if success is not None and success.schema_ is not None:
        dom.extend(_body_blocks(success.schema_, "Response"))

    dom.append("<h3>Response Code Details</h3>")
    rows = [[code, response.description] for code, response in endpoint.responses.items()]
    dom.append(render_table(RESPONSE_HEADINGS, rows))
    return "\n".join(dom)


def _body_blocks(schema: SchemaProperty, label: str) -> list[str]:
    dom = []
    if schema.properties:
        dom.append(f"<h3>{label} Body Structure</h3>")
        dom.append(render_structure(schema))
    if schema.example is not None:
        dom.append(f"<h3>{label} Body Example</h3>")
        dom.append(f'<pre class="codeblock">{escape(format_example(schema.example), quote=False)}</pre>')
    return dom
