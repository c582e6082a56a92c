"""HTML table rendering."""

from html import escape
from typing import Any, Sequence


def format_cell(value: Any) -> str:
    """Plain text form of a cell value; booleans read ``true``/``false``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape(str(value), quote=False)


def render_table(headings: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Render headings and rows of scalar cells as a table block."""
    head = "\n".join(f"<th>{format_cell(th)}</th>" for th in headings)
    body = "\n".join(
        "<tr>" + "\n".join(f"<td>{format_cell(td)}</td>" for td in row) + "</tr>"
        for row in rows
    )
    return f"""<div class="table-container">
    <table>
      <thead>
        <tr>
          {head}
        </tr>
      </thead>
      <tbody>
          {body}
      </tbody>
    </table>
  </div>"""
