"""Response status inference from handler source text.

This is a best-effort text scan, not an analysis of control flow. It reports
codes that merely appear in dead branches or comments (false positives) and
misses codes produced by helpers, exceptions or response classes it has no
pattern for (false negatives).

Heuristics, applied independently and unioned in this order:
- explicit-status json responses, e.g. ``response()->json($data, 201)``
- the fail-when-missing marker (``findOrFail``, ``firstOrFail``) -> 404
- json responses without an explicit status -> 200
- ``abort(403)``-style calls
- a bound validation descriptor -> 422
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

EXAMPLE_KEY = "x-example"

DEFAULT_DESCRIPTION = "OK"


@dataclass(frozen=True)
class ResponsePatterns:
    """Regexes and markers used to spot status evidence in source text."""

    json_with_status: str = r"response\(\)->json\(.*?,\s*(\d{3})\)"
    json_call: str = r"response\(\)->json\([^\)]*\)"
    abort: str = r"abort\((\d{3})\)"
    not_found_marker: str = "OrFail"
    validation_status: str = "422"

    REGEX_FIELDS = ("json_with_status", "json_call", "abort")

    def validate(self) -> None:
        """Compile every regex field; raises re.error on a malformed pattern."""
        for name in self.REGEX_FIELDS:
            re.compile(getattr(self, name))


def infer_status_codes(code: str, has_validation: bool, patterns: ResponsePatterns | None = None) -> list[str]:
    """Return status codes in order of discovery, without duplicates."""
    patterns = patterns or ResponsePatterns()
    codes: list[str] = []

    explicit = re.findall(patterns.json_with_status, code, re.DOTALL)
    codes.extend(explicit)

    if patterns.not_found_marker and patterns.not_found_marker in code:
        codes.append("404")

    json_calls = re.findall(patterns.json_call, code)
    if len(json_calls) > len(explicit):
        codes.append("200")

    codes.extend(re.findall(patterns.abort, code))

    if has_validation:
        codes.append(patterns.validation_status)

    return list(dict.fromkeys(c for c in codes if c))


def build_responses(
    code: str,
    has_validation: bool,
    example: dict[str, Any] | list[Any] | None = None,
    patterns: ResponsePatterns | None = None,
) -> dict[str, dict[str, Any]]:
    """Build the OpenAPI responses object for one handler."""
    responses: dict[str, dict[str, Any]] = {
        status: {"description": f"Response {status}"}
        for status in infer_status_codes(code, has_validation, patterns)
    }

    if example:
        responses[EXAMPLE_KEY] = {
            "description": "Example",
            "content": {"application/json": {"example": example}},
        }

    if not responses:
        logger.debug("No status evidence found, using default 200 response")
        return {"200": {"description": DEFAULT_DESCRIPTION}}
    return responses
