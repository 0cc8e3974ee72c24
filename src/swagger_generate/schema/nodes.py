"""Schema tree nodes.

A node is exactly one of Primitive, ObjectNode or ArrayNode. Constraints only
live on Primitive leaves; containers carry structure.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel

Number = int | float


class Primitive(BaseModel):
    """A leaf field: one primitive type plus its constraints."""

    kind: Literal["primitive"] = "primitive"
    type: str = "string"
    nullable: bool = False
    enum: list[Any] | None = None
    minimum: Number | None = None
    maximum: Number | None = None
    min_length: int | None = None
    max_length: int | None = None

    def to_openapi(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.nullable:
            data["nullable"] = True
        if self.enum is not None:
            data["enum"] = list(self.enum)
        if self.min_length is not None:
            data["minLength"] = self.min_length
        if self.minimum is not None:
            data["minimum"] = self.minimum
        if self.max_length is not None:
            data["maxLength"] = self.max_length
        if self.maximum is not None:
            data["maximum"] = self.maximum
        return data


class ObjectNode(BaseModel):
    kind: Literal["object"] = "object"
    properties: dict[str, "SchemaNode"] = {}
    required: list[str] = []

    def to_openapi(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": "object",
            "properties": {name: node.to_openapi() for name, node in self.properties.items()},
        }
        if self.required:
            data["required"] = list(self.required)
        return data


class ArrayNode(BaseModel):
    kind: Literal["array"] = "array"
    items: "SchemaNode"

    def to_openapi(self) -> dict[str, Any]:
        return {"type": "array", "items": self.items.to_openapi()}


SchemaNode = Union[Primitive, ObjectNode, ArrayNode]

ObjectNode.model_rebuild()
ArrayNode.model_rebuild()


def array_of_objects() -> ArrayNode:
    """A fresh ``Array{items: Object{}}`` node for a wildcard segment."""
    return ArrayNode(items=ObjectNode())
