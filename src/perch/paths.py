"""Path combination — join a base path and a sub-path into one display path."""

import re
from typing import Any

from perch.decoding import decode_path, is_compiled_matcher, normalize_route_path

_SEPARATOR_RUN = re.compile(r"/+")


def combine_paths(base: str, sub: Any) -> str:
    """Join *base* and *sub* with exactly one separator.

    Compiled matchers are decoded first; other non-strings are
    normalized. The result never contains ``//`` and never ends with
    ``/`` unless it is ``/``::

        combine_paths("/", "/")          -> "/"
        combine_paths("/api/", "/users") -> "/api/users"
        combine_paths("/api", "users/")  -> "/api/users"
    """
    if is_compiled_matcher(sub):
        sub_path = decode_path(sub)
    else:
        sub_path = normalize_route_path(sub)

    if base == "/" and sub_path == "/":
        return "/"

    # Leading "/" keeps relative bases absolute; the run collapse absorbs it
    combined = _SEPARATOR_RUN.sub("/", f"/{base}/{sub_path}")
    if len(combined) > 1 and combined.endswith("/"):
        combined = combined[:-1]
    return combined
