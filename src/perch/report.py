"""Route reports — JSON and standalone HTML exports of discovered routes.

The HTML page is rendered through a kida template, the same engine the
rest of the toolchain uses for HTML.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from perch.protection import middleware_name
from perch.records import RouteRecord
from perch.terminal import extract_domain, format_domain_name, sort_routes

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <style>
    body { font-family: system-ui, sans-serif; margin: 2rem; }
    table { border-collapse: collapse; }
    th, td { padding: .25rem .75rem; text-align: left; border-bottom: 1px solid #ddd; }
    .method { font-family: monospace; font-weight: bold; }
    .protected { color: #b35c00; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  {% if rows %}
  <table>
    <thead>
      <tr><th>Domain</th><th>Method</th><th>Path</th><th>Protection</th><th>Middleware</th></tr>
    </thead>
    <tbody>
      {% for row in rows %}
      <tr>
        <td>{{ row.domain }}</td>
        <td class="method">{{ row.method }}</td>
        <td><code>{{ row.path }}</code></td>
        <td{% if row.protected %} class="protected"{% endif %}>{{ row.protection }}</td>
        <td>{{ row.middlewares }}</td>
      </tr>
      {% endfor %}
    </tbody>
  </table>
  {% else %}
  <p>No routes found matching your criteria</p>
  {% endif %}
</body>
</html>
"""


@dataclass(frozen=True, slots=True)
class _Row:
    domain: str
    method: str
    path: str
    protected: bool
    protection: str
    middlewares: str


def describe_middleware(middleware: Any) -> str:
    """Display name of a middleware: its name, else its type name."""
    return middleware_name(middleware) or type(middleware).__name__


def route_to_dict(route: RouteRecord) -> dict[str, Any]:
    """JSON-safe dict for one record; middlewares become names."""
    return {
        "method": route.method,
        "path": route.path,
        "protected": route.protected,
        "middlewares": [describe_middleware(mw) for mw in route.middlewares],
    }


def to_json(routes: Iterable[RouteRecord], *, indent: int | None = 2) -> str:
    """Serialize records to a JSON array, in the given order."""
    return json.dumps([route_to_dict(r) for r in routes], indent=indent)


def render_html(
    routes: Iterable[RouteRecord],
    *,
    title: str = "Routes",
    env: Environment | None = None,
) -> str:
    """Render records, sorted and grouped like the terminal table, as HTML."""
    rows = [
        _Row(
            domain=format_domain_name(extract_domain(r.path)),
            method=r.method,
            path=r.path,
            protected=r.protected,
            protection="protected" if r.protected else "public",
            middlewares=", ".join(describe_middleware(mw) for mw in r.middlewares),
        )
        for r in sort_routes(routes)
    ]
    env = env or Environment(autoescape=True)
    tmpl = env.from_string(_HTML_TEMPLATE)
    return tmpl.render({"title": title, "rows": rows})
