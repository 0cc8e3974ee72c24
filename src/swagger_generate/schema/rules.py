"""Rule tokens -> primitive type and constraints.

Handles:
- `|`-separated rule strings and rule lists (non-string entries dropped)
- Type inference with fixed priority: file > integer > number > boolean > array > string
- required / nullable / in: / min: / max: constraints
- Boolean fields always documented as a 0/1 flag

Unknown tokens are ignored so new rule names never break a run.
"""

import re
from dataclasses import dataclass
from typing import Any

from .nodes import Primitive

MIME_PREFIXES = ("mimes", "mimetypes")
FILE_TOKENS = {"file", "image"}
NUMERIC_TYPES = {"integer", "number"}

_BOUND_RE = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass(frozen=True)
class RuleTokens:
    """Tokens of one field, case-preserved and lower-cased side by side."""

    raw: tuple[str, ...]
    lowered: tuple[str, ...]

    def __contains__(self, token: str) -> bool:
        return token in self.lowered

    def with_prefix(self, prefix: str) -> list[str]:
        """Case-preserved values of tokens starting with ``prefix``."""
        return [raw[len(prefix):] for raw, low in zip(self.raw, self.lowered) if low.startswith(prefix)]


@dataclass(frozen=True)
class Constraints:
    required: bool = False
    nullable: bool = False
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_length: int | None = None
    max_length: int | None = None


def tokenize_rules(spec: Any) -> RuleTokens:
    """Split a rule spec (``"required|min:3"`` or a list) into tokens."""
    if isinstance(spec, str):
        parts = spec.split("|")
    elif isinstance(spec, (list, tuple)):
        parts = [r for r in spec if isinstance(r, str)]
    else:
        parts = []

    raw = tuple(p.strip() for p in parts if p.strip())
    return RuleTokens(raw=raw, lowered=tuple(t.lower() for t in raw))


def infer_type(tokens: RuleTokens) -> str:
    if any(t.startswith(MIME_PREFIXES) for t in tokens.lowered):
        return "file"
    if FILE_TOKENS & set(tokens.lowered):
        return "file"
    if "integer" in tokens:
        return "integer"
    if "numeric" in tokens:
        return "number"
    if "boolean" in tokens:
        return "boolean"
    if "array" in tokens:
        return "array"
    return "string"


def _parse_bound(value: str, field_type: str) -> int | float | None:
    value = value.strip()
    if not _BOUND_RE.match(value):
        return None
    if "." in value:
        # Fractional bounds only make sense for numbers
        return float(value) if field_type == "number" else None
    return int(value)


def extract_constraints(tokens: RuleTokens, field_type: str) -> Constraints:
    """Map rule tokens to schema constraints for a field of ``field_type``."""
    enum: list[Any] | None = None
    in_values = tokens.with_prefix("in:")
    if in_values:
        enum = in_values[0].split(",")
    if field_type == "boolean":
        enum = [0, 1]

    bounds: dict[str, int | float] = {}
    for prefix, length_key, value_key in (
        ("min:", "min_length", "minimum"),
        ("max:", "max_length", "maximum"),
    ):
        for raw in tokens.with_prefix(prefix):
            bound = _parse_bound(raw, field_type)
            if bound is None:
                continue
            if field_type == "string":
                bounds[length_key] = bound
            elif field_type in NUMERIC_TYPES:
                bounds[value_key] = bound

    return Constraints(
        required="required" in tokens,
        nullable="nullable" in tokens,
        enum=enum,
        **bounds,
    )


def build_leaf(field_type: str, constraints: Constraints) -> Primitive:
    return Primitive(
        type=field_type,
        nullable=constraints.nullable,
        enum=constraints.enum,
        minimum=constraints.minimum,
        maximum=constraints.maximum,
        min_length=constraints.min_length,
        max_length=constraints.max_length,
    )
