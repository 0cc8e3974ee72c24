"""Route manifest loader.

A manifest is a YAML file describing what a live framework would otherwise
provide by reflection:

    app:          document title / version / url overrides
    routes:       ordered route table (uri, methods, action, middleware)
    handlers:     action -> validator name and handler source location
    validators:   validator name -> rules (+ optional example payload)
    heuristics:   optional overrides of the response-code patterns

Handler sources are paths relative to the manifest file.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from swagger_generate.config import Settings
from swagger_generate.exceptions import ManifestError
from swagger_generate.generator.responses import ResponsePatterns
from swagger_generate.models import HandlerRef, RouteDescriptor, ValidationDescriptor

logger = logging.getLogger(__name__)


class HandlerEntry(BaseModel):
    """Static metadata for one ``Controller@method`` action."""

    validation: str | ValidationDescriptor | None = None
    source: str | None = None
    lines: tuple[int, int] | None = None  # 1-based, inclusive
    code: str | None = None


class Manifest(BaseModel):
    app: dict[str, Any] = {}
    routes: list[RouteDescriptor] = []
    handlers: dict[str, HandlerEntry] = {}
    validators: dict[str, ValidationDescriptor] = {}
    heuristics: dict[str, str] = {}

    def response_patterns(self) -> ResponsePatterns:
        return ResponsePatterns(**self.heuristics)


def load_manifest(file_path: Path) -> Manifest:
    """Read and validate a manifest file."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError(f"{file_path}: top level must be a mapping")

    try:
        manifest = Manifest(**data)
        patterns = manifest.response_patterns()
    except (ValidationError, TypeError) as e:
        raise ManifestError(f"{file_path}: {e}") from e

    try:
        patterns.validate()
    except re.error as e:
        raise ManifestError(f"{file_path}: invalid heuristic pattern: {e}") from e

    _check_validator_refs(manifest, file_path)
    return manifest


def _check_validator_refs(manifest: Manifest, file_path: Path) -> None:
    for action, entry in manifest.handlers.items():
        if isinstance(entry.validation, str) and entry.validation not in manifest.validators:
            raise ManifestError(f"{file_path}: handler {action} references unknown validator {entry.validation!r}")


def filter_api_routes(routes: list[RouteDescriptor], settings: Settings) -> list[RouteDescriptor]:
    """Keep application controller routes that run behind the API middleware."""
    kept = []
    for route in routes:
        handler = route.handler
        if handler is None or not handler.controller.startswith(settings.controller_namespace):
            continue
        if settings.api_middleware not in route.middleware:
            continue
        kept.append(route)
    logger.debug("Kept %d of %d routes", len(kept), len(routes))
    return kept


class ManifestResolver:
    """Validation descriptors and source spans looked up from a manifest."""

    def __init__(self, manifest: Manifest, base_dir: Path):
        self.manifest = manifest
        self.base_dir = base_dir
        self._files: dict[Path, list[str]] = {}

    def validation_for(self, handler: HandlerRef) -> ValidationDescriptor | None:
        entry = self.manifest.handlers.get(handler.action)
        if entry is None or entry.validation is None:
            return None
        if isinstance(entry.validation, ValidationDescriptor):
            return entry.validation
        return self.manifest.validators[entry.validation]

    def source_for(self, handler: HandlerRef) -> str:
        """Literal text of the handler's declared span; empty if none is declared."""
        entry = self.manifest.handlers.get(handler.action)
        if entry is None:
            return ""
        if entry.code is not None:
            return entry.code
        if entry.source is None:
            return ""

        lines = self._read_lines(self.base_dir / entry.source)
        if entry.lines is None:
            return "".join(lines)
        start, end = entry.lines
        return "".join(lines[max(start, 1) - 1:end])

    def _read_lines(self, path: Path) -> list[str]:
        if path not in self._files:
            try:
                self._files[path] = path.read_text(encoding="utf-8").splitlines(keepends=True)
            except OSError as e:
                raise ManifestError(f"Cannot read handler source {path}: {e}") from e
        return self._files[path]
