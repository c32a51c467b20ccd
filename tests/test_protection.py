"""Tests for perch.protection — protection precedence and middleware names."""

import functools
from types import SimpleNamespace

from perch.protection import middleware_name, resolve_protection
from perch.records import RouteCheck


def requireAuth() -> None:  # noqa: N802
    return None


def log_request() -> None:
    return None


class TestMiddlewareName:
    def test_function(self) -> None:
        assert middleware_name(requireAuth) == "requireAuth"

    def test_partial(self) -> None:
        assert middleware_name(functools.partial(log_request)) == "log_request"

    def test_descriptor_mapping(self) -> None:
        assert middleware_name({"name": "session"}) == "session"

    def test_descriptor_object(self) -> None:
        assert middleware_name(SimpleNamespace(name="csrf")) == "csrf"

    def test_class(self) -> None:
        class AuthMiddleware:
            pass

        assert middleware_name(AuthMiddleware) == "AuthMiddleware"

    def test_nameless(self) -> None:
        assert middleware_name(None) is None
        assert middleware_name(object()) is None

    def test_raising_name_property(self) -> None:
        class Exploding:
            @property
            def name(self) -> str:
                raise RuntimeError("boom")

        assert middleware_name(Exploding()) is None

    def test_raising_dunder_name_falls_back(self) -> None:
        class Descriptor:
            name = "session"

            def __getattr__(self, attr: str) -> object:
                raise RuntimeError(attr)

        assert middleware_name(Descriptor()) == "session"


class TestResolveProtection:
    def test_default_unprotected(self) -> None:
        assert resolve_protection("/x", "GET", [requireAuth]) is False

    def test_name_match(self) -> None:
        assert resolve_protection("/x", "GET", [log_request, requireAuth], None, "requireAuth")

    def test_name_list(self) -> None:
        names = ["session", "requireAuth"]
        assert resolve_protection("/x", "GET", [requireAuth], None, names) is True

    def test_name_is_exact(self) -> None:
        assert resolve_protection("/x", "GET", [requireAuth], None, "requireauth") is False

    def test_no_matching_middleware(self) -> None:
        assert resolve_protection("/x", "GET", [log_request], None, "requireAuth") is False

    def test_predicate_receives_upper_method(self) -> None:
        seen: list[RouteCheck] = []

        def predicate(check: RouteCheck) -> bool:
            seen.append(check)
            return check.method == "POST"

        assert resolve_protection("/x", "post", [log_request], predicate) is True
        assert seen == [RouteCheck(path="/x", method="POST", middlewares=(log_request,))]

    def test_predicate_wins_over_names(self) -> None:
        result = resolve_protection(
            "/x", "GET", [requireAuth], lambda check: False, "requireAuth"
        )
        assert result is False

    def test_predicate_result_coerced(self) -> None:
        assert resolve_protection("/x", "GET", [], lambda check: 1) is True
