"""Tests for perch.report — JSON and HTML exports."""

import json

from perch.records import RouteRecord
from perch.report import describe_middleware, render_html, route_to_dict, to_json


def require_auth() -> None:
    return None


ROUTES = [
    RouteRecord("POST", "/api/users", True, (require_auth,)),
    RouteRecord("GET", "/api/users", False, ()),
]


class TestJSON:
    def test_route_to_dict(self) -> None:
        assert route_to_dict(ROUTES[0]) == {
            "method": "POST",
            "path": "/api/users",
            "protected": True,
            "middlewares": ["require_auth"],
        }

    def test_keeps_order(self) -> None:
        data = json.loads(to_json(ROUTES))
        assert [d["method"] for d in data] == ["POST", "GET"]

    def test_nameless_middleware(self) -> None:
        assert describe_middleware(object()) == "object"


class TestHTML:
    def test_renders_rows(self) -> None:
        html = render_html(ROUTES, title="API routes")
        assert "<title>API routes</title>" in html
        assert "<code>/api/users</code>" in html
        assert "require_auth" in html
        assert html.index(">GET<") < html.index(">POST<")

    def test_empty(self) -> None:
        html = render_html([])
        assert "No routes found matching your criteria" in html
        assert "<table>" not in html

    def test_escapes_paths(self) -> None:
        html = render_html([RouteRecord("GET", "/a<script>", False)])
        assert "<script>" not in html
