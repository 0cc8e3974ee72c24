"""Build one OpenAPI operation per route + HTTP method."""

import logging
import re
from typing import Any

from swagger_generate.models import HandlerRef, Parameter, PathItem, RequestBody, RouteDescriptor, ValidationDescriptor
from swagger_generate.schema.compiler import MULTIPART, compile_descriptor

from .naming import build_summary, build_tag
from .responses import ResponsePatterns, build_responses

logger = logging.getLogger(__name__)

TUNNELED_METHODS = ("PUT", "PATCH")
METHOD_FIELD = "_method"
SECURITY_SCHEME = "bearerAuth"

_PATH_PARAM_RE = re.compile(r"{(\w+)}")


def extract_path_parameters(uri: str) -> list[Parameter]:
    """Every ``{name}`` placeholder becomes a required integer path parameter."""
    return [
        Parameter(name=name, location="path", required=True, schema_def={"type": "integer"})
        for name in _PATH_PARAM_RE.findall(uri)
    ]


def requires_auth(middleware: list[str], marker: str = "auth") -> bool:
    return any(marker in name for name in middleware)


def document_method(http_method: str) -> str:
    """Lowercase method key used in the document; PUT/PATCH tunnel through POST."""
    method = http_method.upper()
    if method in TUNNELED_METHODS:
        return "post"
    return method.lower()


def _method_field(verb: str) -> dict[str, Any]:
    return {"type": "string", "enum": [verb]}


class PathItemBuilder:
    """Assembles path items from rule schemas, response inference and naming."""

    def __init__(self, auth_marker: str = "auth", patterns: ResponsePatterns | None = None):
        self.auth_marker = auth_marker
        self.patterns = patterns

    def build(
        self,
        route: RouteDescriptor,
        http_method: str,
        descriptor: ValidationDescriptor | None = None,
        source: str = "",
    ) -> PathItem:
        verb = http_method.upper()
        handler = route.handler or HandlerRef(controller="", method="")
        logger.debug("Building %s %s (%s)", verb, route.path, handler.action)

        example = descriptor.example if descriptor else None
        item = PathItem(
            tags=[build_tag(handler.resource_name)],
            summary=build_summary(handler.resource_name, handler.method),
            parameters=extract_path_parameters(route.path),
            responses=build_responses(source, descriptor is not None, example, self.patterns),
        )

        if descriptor is not None:
            self._apply_descriptor(item, verb, descriptor)
        elif verb in TUNNELED_METHODS:
            item.request_body = RequestBody(
                content_type=MULTIPART,
                schema_def={
                    "type": "object",
                    "properties": {METHOD_FIELD: _method_field(verb)},
                    "required": [METHOD_FIELD],
                },
            )

        if requires_auth(route.middleware, self.auth_marker):
            item.security = [{SECURITY_SCHEME: []}]

        return item

    def _apply_descriptor(self, item: PathItem, verb: str, descriptor: ValidationDescriptor) -> None:
        compiled = compile_descriptor(descriptor)
        schema = compiled.schema_dict()

        if verb == "GET":
            required = set(schema.get("required", []))
            for name, prop in schema["properties"].items():
                item.parameters.append(
                    Parameter(name=name, location="query", required=name in required, schema_def=prop)
                )
            return

        if verb in TUNNELED_METHODS:
            schema["properties"][METHOD_FIELD] = _method_field(verb)
            schema.setdefault("required", []).append(METHOD_FIELD)
            if "example" in schema:
                # keep the example last, after the synthetic field
                schema["example"] = schema.pop("example")

        item.request_body = RequestBody(content_type=compiled.content_type, schema_def=schema)
