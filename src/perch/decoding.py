"""Pattern decoding — recover display paths from compiled matchers.

Layer-stack routers compile every mount path into a regular expression
and throw the literal away. The text of that expression is all that is
left, so decoding is a layered, best-effort guess:

1. ``fast_path_route`` — the literal mount form
   ``^\\/api\\/users\\/?(?=\\/|$)``, un-escaped directly.
2. ``structural_route`` — strip anchors, terminators and group syntax
   from anything that still looks like an anchored path pattern.
3. ``fallback_route`` — ``/``.

``decode_path`` never raises. Complex patterns (alternation, lookaround,
parameter constraints) degrade to a literal prefix or to ``/``.
"""

import re
from dataclasses import dataclass
from typing import Any

# Literal ``/…/flags`` form, as a matcher's display text renders it
_DELIMITED = re.compile(r"\A/(\^.*)/([dgimsuvy]*)\Z", re.DOTALL)
_INLINE_FLAGS = re.compile(r"\A\(\?[aiLmsux]+\)")

# Unescaped non-metacharacters, or any escaped punctuation
_LITERAL_BODY = r"(?:[^\\()\[\]{}?*+|^$.]|\\[^A-Za-z0-9])*?"
_TRAILER = r"(?:\\/\?)?(?:\(\?=\\/\|\$\))?\$?"

_FAST_PATH = re.compile(rf"\A\^({_LITERAL_BODY}){_TRAILER}\Z")
_ROOT_ONLY = re.compile(rf"\A{_TRAILER}\Z")
_TERMINATOR = re.compile(rf"{_TRAILER}\Z")
_ESCAPED = re.compile(r"\\(.)")

_LITERAL_GROUP = re.compile(r"\(\?:(/[\w\-.~/]*)\)")
_WRAPPED_CAPTURE = re.compile(r"\(\?:\([^)]*\)\)")
_GROUP = re.compile(r"\([^)]*\)")
_METACHARS = re.compile(r"[\^$?*+\[\]\\{}|()]")
_SEPARATOR_RUN = re.compile(r"/{2,}")


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """Opaque text of a compiled path matcher.

    Layers may carry a ``re.Pattern``, a ``/…/flags`` string from a
    dumped tree, or some other object; all of them are reduced to text
    once, at the classification boundary.
    """

    text: str

    @classmethod
    def of(cls, raw: Any) -> "CompiledMatcher | None":
        if raw is None:
            return None
        if isinstance(raw, CompiledMatcher):
            return raw
        return cls(matcher_text(raw))


def matcher_text(matcher: Any) -> str:
    """Render a matcher as text. Never raises."""
    if matcher is None:
        return ""
    if isinstance(matcher, CompiledMatcher):
        return matcher.text
    if isinstance(matcher, re.Pattern):
        pattern = matcher.pattern
        if isinstance(pattern, bytes):
            return pattern.decode("latin-1")
        return pattern
    if isinstance(matcher, str):
        return matcher
    try:
        return str(matcher)
    except Exception:
        return ""


def is_compiled_matcher(value: Any) -> bool:
    """True for values the decoder should interpret rather than display."""
    return isinstance(value, (CompiledMatcher, re.Pattern))


def _unwrap(text: str) -> str:
    """Drop ``/…/flags`` delimiters and a leading inline flag group."""
    match = _DELIMITED.match(text)
    if match:
        text = match.group(1)
    return _INLINE_FLAGS.sub("", text, count=1)


def _finish(path: str) -> str:
    path = _SEPARATOR_RUN.sub("/", path)
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def fast_path_route(text: str) -> str | None:
    """Decode the literal mount form, or return ``None``.

    Examples::

        ^\\/api\\/users\\/?(?=\\/|$)   -> /api/users
        /^\\/v1\\/?(?=\\/|$)/i          -> /v1
        ^\\/?(?=\\/|$)                -> /
    """
    match = _FAST_PATH.match(_unwrap(text))
    if match is None:
        return None
    return _finish(_ESCAPED.sub(r"\1", match.group(1)))


def structural_route(text: str) -> str | None:
    """Strip pattern syntax from an anchored path pattern, or return ``None``.

    Group contents are usually parameter placeholders, so they are
    dropped rather than guessed at; a non-capturing group holding only
    a literal path is unwrapped.
    """
    body = _unwrap(text)
    if "^\\/" not in body and "\\/?" not in body and "^(?:\\/" not in body:
        return None

    if body.startswith("^"):
        body = body[1:]
    if _ROOT_ONLY.match(body):
        return "/"

    body = _TERMINATOR.sub("", body, count=1)
    path = body.replace("\\/", "/")
    path = _LITERAL_GROUP.sub(r"\1", path)
    path = _WRAPPED_CAPTURE.sub("", path)
    path = _GROUP.sub("", path)
    path = _SEPARATOR_RUN.sub("/", path)
    path = _METACHARS.sub("", path)
    return _finish(path)


def fallback_route(text: str) -> str:  # noqa: ARG001
    return "/"


def decode_path(matcher: Any) -> str:
    """Recover a display path from a compiled matcher. Never raises.

    Accepts a ``re.Pattern``, a ``CompiledMatcher``, matcher text, or
    ``None`` (which decodes to ``/``).
    """
    text = matcher_text(matcher)
    if not text:
        return "/"
    return fast_path_route(text) or structural_route(text) or fallback_route(text)


def normalize_route_path(value: Any) -> str:
    """Normalize a route's own path fragment to display text.

    Strings are returned unchanged. Compiled matchers keep their shape,
    with capture groups shown as ``:param``::

        re.compile(r"^\\/files\\/(.*)$")  -> /files/:param

    Sequences (a route declared for several paths) are comma-joined.
    Anything else is shown via ``str()``, defaulting to ``/``.
    """
    if isinstance(value, str):
        return value

    if is_compiled_matcher(value):
        text = _unwrap(matcher_text(value))
        if text.startswith("^"):
            text = text[1:]
        if text.endswith("$") and not text.endswith("\\$"):
            text = text[:-1]
        text = text.replace("\\/", "/")
        text = _WRAPPED_CAPTURE.sub(":param", text)
        text = _GROUP.sub(":param", text)
        return text if text.startswith("/") else "/" + text

    if isinstance(value, (list, tuple)):
        text = ",".join(normalize_route_path(v) for v in value)
    else:
        try:
            text = str(value) if value is not None else ""
        except Exception:
            text = ""
    text = text or "/"
    return text if text.startswith("/") else "/" + text
