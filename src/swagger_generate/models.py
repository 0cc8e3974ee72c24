"""Data models shared by the manifest loader and the document generator.

Routes and validation descriptors come from the manifest; parameters,
request bodies and path items are the pieces of one OpenAPI operation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

RuleSpec = str | list[Any]


class HandlerRef(BaseModel):
    """Controller class + method that handles a route."""

    model_config = ConfigDict(frozen=True)

    controller: str  # App\Http\Controllers\UserController
    method: str  # store

    @classmethod
    def parse(cls, action: str) -> "HandlerRef | None":
        """Parse ``Controller@method``. Closure actions have no ``@`` and give None."""
        if "@" not in action:
            return None
        controller, method = action.rsplit("@", 1)
        if not controller or not method:
            return None
        return cls(controller=controller, method=method)

    @property
    def action(self) -> str:
        return f"{self.controller}@{self.method}"

    @property
    def resource_name(self) -> str:
        """Class basename without the ``Controller`` suffix."""
        basename = self.controller.replace("/", "\\").rsplit("\\", 1)[-1]
        basename = basename.rsplit(".", 1)[-1]
        return basename.replace("Controller", "")


class RouteDescriptor(BaseModel):
    """One entry of the application's route table."""

    model_config = ConfigDict(frozen=True)

    uri: str  # /api/users/{user}
    methods: list[str]
    action: str = ""  # Controller@method, empty for closures
    middleware: list[str] = []

    @property
    def handler(self) -> HandlerRef | None:
        return HandlerRef.parse(self.action)

    @property
    def path(self) -> str:
        return "/" + self.uri.lstrip("/")


class ValidationDescriptor(BaseModel):
    """Declared input validation of a handler: field path -> rule spec."""

    rules: dict[str, RuleSpec] = {}
    example: dict[str, Any] | list[Any] | None = None


class Parameter(BaseModel):
    """A single path or query parameter."""

    name: str
    location: str  # path / query
    required: bool
    schema_def: dict[str, Any]

    def to_openapi(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "in": self.location,
            "required": self.required,
            "schema": self.schema_def,
        }


class RequestBody(BaseModel):
    content_type: str = "application/json"
    schema_def: dict[str, Any]

    def to_openapi(self) -> dict[str, Any]:
        return {"content": {self.content_type: {"schema": self.schema_def}}}


class PathItem(BaseModel):
    """The OpenAPI operation for one route + HTTP method."""

    tags: list[str]
    summary: str
    parameters: list[Parameter] = []
    responses: dict[str, dict[str, Any]]
    request_body: RequestBody | None = None
    security: list[dict[str, list[str]]] | None = None

    def to_openapi(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "tags": list(self.tags),
            "summary": self.summary,
            "parameters": [p.to_openapi() for p in self.parameters],
            "responses": self.responses,
        }
        if self.request_body is not None:
            data["requestBody"] = self.request_body.to_openapi()
        if self.security is not None:
            data["security"] = self.security
        return data
