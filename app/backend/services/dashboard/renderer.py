"""
HTML rendering of extracted tables and comparison documents.

Produces self-contained pages (markup plus inline CSS). Cell text comes
from untrusted PDFs, so every value goes through Jinja2 autoescaping.
"""

import json
from typing import Any

from jinja2 import Environment, select_autoescape

# Handle both package imports and standalone imports
try:
    from ...models import ExtractedTable
except ImportError:
    from models import ExtractedTable

from .table_parser import format_number


# =============================================================================
# Templates
# =============================================================================

TABLE_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
      body { font-family: 'Inter', Arial, sans-serif; background-color: #f0f4f8; margin: 0; padding: 20px; }
      .container { max-width: 900px; margin: 20px auto; background-color: #ffffff; padding: 30px; border-radius: 12px; box-shadow: 0 4px 12px rgba(0, 0, 0, 0.1); }
      h1 { font-size: 2.5rem; color: #4338ca; text-align: center; margin-bottom: 25px; font-weight: 700; }
      .table-wrapper { overflow-x: auto; }
      table { border-collapse: collapse; width: 100%; margin-top: 20px; }
      th, td { border: 1px solid #e2e8f0; padding: 12px 15px; text-align: left; }
      th { background-color: #e0f2fe; color: #1e3a8a; font-weight: 600; text-transform: uppercase; font-size: 0.85rem; }
      tr:nth-child(even) { background-color: #f8fafc; }
      tr:hover { background-color: #eef2ff; }
      td { color: #334155; font-size: 0.9rem; }
    </style>
  </head>
  <body>
    <div class="container">
      <h1>{{ heading }}</h1>
      <div class="table-wrapper">
        <table>
          <thead>
            <tr>{% for header in headers %}<th>{{ header }}</th>{% endfor %}</tr>
          </thead>
          <tbody>
            {% for row in rows %}<tr>{% for cell in row %}<td>{{ cell }}</td>{% endfor %}</tr>
            {% endfor %}
          </tbody>
        </table>
      </div>
    </div>
  </body>
</html>
"""

COMPARISON_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <style>
      body { font-family: Arial, sans-serif; margin: 20px; line-height: 1.5; }
      pre { white-space: pre-wrap; }
    </style>
  </head>
  <body>
    <h1>{{ heading }}</h1>
    <pre>{{ text }}</pre>
  </body>
</html>
"""

_environment = Environment(autoescape=select_autoescape(default_for_string=True))
_table_template = _environment.from_string(TABLE_TEMPLATE)
_comparison_template = _environment.from_string(COMPARISON_TEMPLATE)


def format_cell(value: Any) -> str:
    """Return the display text of a cell value."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return json.dumps(value, default=str)


def render_table(
    table: ExtractedTable,
    title: str = "Dashboard",
    heading: str = "PDF Table Dashboard",
) -> str:
    """
    Render an extracted table as a standalone HTML dashboard.

    Args:
        table: A validated table.
        title: Document title shown in the browser tab.
        heading: Page heading above the table.

    Returns:
        The HTML document.
    """
    return _table_template.render(
        title=title,
        heading=heading,
        headers=table.headers,
        rows=[[format_cell(cell) for cell in row] for row in table.rows],
    )


def render_comparison(text: str, title: str = "Comparison") -> str:
    """
    Render a pre-assembled comparison text verbatim in a preformatted block.

    The text is shown as supplied; no model is consulted.
    """
    return _comparison_template.render(
        title=title,
        heading="Document Comparison",
        text=text,
    )
