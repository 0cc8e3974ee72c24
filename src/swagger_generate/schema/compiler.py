"""Compile a validation rule set into a request body schema."""

import logging
from typing import Any

from pydantic import BaseModel

from swagger_generate.models import ValidationDescriptor

from .nodes import ObjectNode
from .paths import WILDCARD_SEPARATOR, resolve_field
from .rules import build_leaf, extract_constraints, infer_type, tokenize_rules

logger = logging.getLogger(__name__)

JSON = "application/json"
MULTIPART = "multipart/form-data"


class CompiledBody(BaseModel):
    """Request body derived from one validation descriptor."""

    content_type: str = JSON
    schema_node: ObjectNode
    example: dict[str, Any] | list[Any] | None = None

    def schema_dict(self) -> dict[str, Any]:
        data = self.schema_node.to_openapi()
        if self.example is not None:
            data["example"] = self.example
        return data


def compile_rules(rules: dict[str, Any], example: dict[str, Any] | list[Any] | None = None) -> CompiledBody:
    """Turn ``{field path: rule spec}`` into a CompiledBody. Never raises."""
    root = ObjectNode()
    has_file = False

    for field, spec in rules.items():
        tokens = tokenize_rules(spec)
        field_type = infer_type(tokens)
        constraints = extract_constraints(tokens, field_type)

        if field_type == "file":
            has_file = True

        resolve_field(root.properties, field, build_leaf(field_type, constraints))

        if constraints.required and WILDCARD_SEPARATOR not in field:
            root.required.append(field)

    logger.debug("Compiled %d rules into %d top-level properties", len(rules), len(root.properties))

    return CompiledBody(
        content_type=MULTIPART if has_file else JSON,
        schema_node=root,
        example=example,
    )


def compile_descriptor(descriptor: ValidationDescriptor) -> CompiledBody:
    return compile_rules(descriptor.rules, descriptor.example)
