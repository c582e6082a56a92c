"""Schema property tree rendering.

A property renders as a list item annotated with its type, required marker
and description. Object children nest in a ``schema-list``; array item
properties nest in a ``schema-list`` framed by ``[`` and ``]`` markers.

Required-ness belongs to the parent: every node is rendered against the
``required`` list of the schema that declares it, and that list is passed
down explicitly with each child.
"""

from html import escape
from typing import Sequence, Union

from api_preview.parser.models import SchemaProperty

REQUIRED_MARKER = '<span class="required">* required</span>'
ARRAY_OPEN = '<span class="array-bound">[</span>'
ARRAY_CLOSE = '<span class="array-bound">]</span>'

_Work = Union[str, tuple[str, SchemaProperty, Sequence[str]]]


def render_property(name: str, prop: SchemaProperty, required: Sequence[str] = ()) -> str:
    """Render one property and all of its descendants.

    The tree is walked with an explicit stack of pending markup and nodes,
    so arbitrarily deep schemas render without recursion.
    """
    out: list[str] = []
    stack: list[_Work] = [(name, prop, required)]
    while stack:
        work = stack.pop()
        if isinstance(work, str):
            out.append(work)
            continue

        name, prop, required = work
        out.append(_property_header(name, prop, name in required))
        tail: list[_Work] = []
        if prop.properties:
            tail.append('<ul class="schema-list">')
            tail.extend((child, p, prop.required) for child, p in prop.properties.items())
            tail.append("</ul>")
        if prop.items is not None and prop.items.properties:
            tail.append(ARRAY_OPEN)
            tail.append('<ul class="schema-list">')
            tail.extend((child, p, prop.items.required) for child, p in prop.items.properties.items())
            tail.append("</ul>")
            tail.append(ARRAY_CLOSE)
        tail.append("</li>")
        stack.extend(reversed(tail))

    return "\n".join(out)


def render_structure(schema: SchemaProperty) -> str:
    """Render the top-level properties of a body schema as one list."""
    parts = ['<ul class="schema-list first">']
    parts.extend(render_property(name, prop, schema.required) for name, prop in schema.properties.items())
    parts.append("</ul>")
    return "\n".join(parts)


def _property_header(name: str, prop: SchemaProperty, is_required: bool) -> str:
    return f"""<li class="schema-property">
  <div class="schema-property__description">
    <div class="schema-property__description-title">{escape(name, quote=False)}</div>
    <span class="schema-property__description-type">({escape(prop.type, quote=False)})</span>
    {REQUIRED_MARKER if is_required else ""}
    <div class="schema-property__description-description">{escape(prop.description, quote=False)}</div>
  </div>"""
