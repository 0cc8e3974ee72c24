"""Document assembly: fold path items into one OpenAPI 3.0.0 document."""

import logging
from typing import Any, Protocol

from pydantic import BaseModel

from swagger_generate.config import Settings
from swagger_generate.models import HandlerRef, PathItem, RouteDescriptor, ValidationDescriptor

from .path_item import PathItemBuilder, document_method
from .responses import ResponsePatterns

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
SKIPPED_METHODS = {"HEAD"}


class HandlerMetadata(Protocol):
    """Lookup of per-handler validation descriptors and source spans."""

    def validation_for(self, handler: HandlerRef) -> ValidationDescriptor | None: ...

    def source_for(self, handler: HandlerRef) -> str: ...


class OpenApiDocument(BaseModel):
    title: str
    version: str
    server_url: str
    server_description: str = "Base API URL"
    paths: dict[str, dict[str, PathItem]] = {}

    def add(self, uri: str, method: str, item: PathItem) -> None:
        operations = self.paths.setdefault(uri, {})
        if method in operations:
            logger.debug("%s %s defined twice, keeping the later definition", method.upper(), uri)
        operations[method] = item

    def to_openapi(self) -> dict[str, Any]:
        return {
            "openapi": OPENAPI_VERSION,
            "info": {"title": self.title, "version": self.version},
            "servers": [{"url": self.server_url, "description": self.server_description}],
            "paths": {
                uri: {method: item.to_openapi() for method, item in operations.items()}
                for uri, operations in self.paths.items()
            },
            "components": {
                "securitySchemes": {
                    "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
                },
            },
        }


class DocumentAssembler:
    """Walks the route table once and builds the document."""

    def __init__(self, settings: Settings, metadata: HandlerMetadata, patterns: ResponsePatterns | None = None):
        self.settings = settings
        self.metadata = metadata
        self.builder = PathItemBuilder(auth_marker=settings.auth_marker, patterns=patterns)

    def new_document(self) -> OpenApiDocument:
        return OpenApiDocument(
            title=self.settings.title,
            version=self.settings.version,
            server_url=self.settings.server_url,
            server_description=self.settings.server_description,
        )

    def assemble(self, routes: list[RouteDescriptor]) -> OpenApiDocument:
        document = self.new_document()
        for route in routes:
            handler = route.handler
            descriptor = self.metadata.validation_for(handler) if handler else None
            source = self.metadata.source_for(handler) if handler else ""

            for http_method in route.methods:
                if http_method.upper() in SKIPPED_METHODS:
                    continue
                item = self.builder.build(route, http_method, descriptor, source)
                document.add(route.path, document_method(http_method), item)

        logger.debug("Assembled %d paths from %d routes", len(document.paths), len(routes))
        return document


def generate_document(
    routes: list[RouteDescriptor],
    metadata: HandlerMetadata,
    settings: Settings | None = None,
    patterns: ResponsePatterns | None = None,
) -> dict[str, Any]:
    """Build the OpenAPI document for ``routes`` as a plain dict."""
    assembler = DocumentAssembler(settings or Settings(), metadata, patterns)
    return assembler.assemble(routes).to_openapi()
