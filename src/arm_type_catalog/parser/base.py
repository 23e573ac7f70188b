"""Unified data models for loaded REST operations.

The loader converts API description documents into these models;
the processor only ever reads them.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class EnumValue(BaseModel):
    """A single declared value of an enumeration."""

    name: str
    serialized_name: str


class EnumType(BaseModel):
    """A type restricted to a fixed, ordered list of values."""

    kind: Literal["enum"] = "enum"
    name: str = ""
    values: list[EnumValue] = []
    model_as_string: bool = False


class PrimaryType(BaseModel):
    """Any non-enumeration type (string / integer / object / ...)."""

    kind: Literal["primary"] = "primary"
    name: str = "string"


ModelType = Annotated[EnumType | PrimaryType, Field(discriminator="kind")]


class Parameter(BaseModel):
    """A single declared operation parameter."""

    model_config = ConfigDict(protected_namespaces=())

    serialized_name: str
    location: str = "path"  # path / query / header / body
    required: bool = False
    description: str = ""
    model_type: ModelType | None = None


class OperationMetadata(BaseModel):
    """Operation metadata carried through to every descriptor it produces."""

    model_config = ConfigDict(frozen=True)

    operation_id: str = ""
    api_versions: tuple[str, ...] = ()


class OperationDescriptor(BaseModel):
    """A single REST operation: verb, URL template and declared parameters."""

    method: HttpMethod
    url: str  # /subscriptions/{subscriptionId}/providers/Microsoft.Foo/bars/{barName}
    parameters: list[Parameter] = []
    metadata: OperationMetadata = OperationMetadata()
    summary: str = ""

    @field_validator("method", mode="before")
    @classmethod
    def upper_method(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def api_versions(self) -> tuple[str, ...]:
        return self.metadata.api_versions

    @property
    def operation_id(self) -> str:
        return self.metadata.operation_id

    def find_parameter(self, serialized_name: str) -> Parameter | None:
        """Return the first declared parameter with the given serialized name."""
        for parameter in self.parameters:
            if parameter.serialized_name == serialized_name:
                return parameter
        return None
