"""Resource descriptors built from PUT and list-action operations."""

from pydantic import BaseModel, ConfigDict, field_validator

from arm_type_catalog.parser.base import HttpMethod, OperationDescriptor, OperationMetadata
from arm_type_catalog.processor.result import Failure, ParseResult, Success
from arm_type_catalog.processor.scope import ScopeType, classify_scope
from arm_type_catalog.processor.segments import expand_resource_types, extract_name_segments


class ResourceDescriptor(BaseModel):
    """One concrete resource type at one scope and API version."""

    model_config = ConfigDict(frozen=True)

    scope_type: ScopeType
    provider_namespace: str
    resource_type_segments: tuple[str, ...]
    api_version: str
    has_variable_name: bool
    metadata: OperationMetadata = OperationMetadata()

    @field_validator("resource_type_segments")
    @classmethod
    def segments_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("resource_type_segments must not be empty")
        return value

    @property
    def full_type(self) -> str:
        """``Microsoft.Foo/bars/bazs``"""
        return "/".join((self.provider_namespace, *self.resource_type_segments))

    @property
    def full_type_with_api_version(self) -> str:
        return f"{self.full_type}@{self.api_version}"


def should_process_resource_type(operation: OperationDescriptor, api_version: str) -> bool:
    if operation.method != HttpMethod.PUT:
        return False
    if not operation.url or not operation.url.strip():
        return False
    return api_version in operation.api_versions


def should_process_list_action(operation: OperationDescriptor, api_version: str) -> bool:
    if operation.method != HttpMethod.POST:
        return False
    if not operation.url or not operation.url.strip():
        return False

    action_name = operation.url.split("/")[-1]
    if not action_name.lower().startswith("list"):
        return False

    return api_version in operation.api_versions


def parse_resource_descriptors(
    operation: OperationDescriptor,
    api_version: str,
    scope_type: ScopeType,
    routing_scope: str,
) -> ParseResult[list[ResourceDescriptor]]:
    """Build one descriptor per expanded resource type path of a routing scope."""
    extracted = extract_name_segments(routing_scope)
    if isinstance(extracted, Failure):
        return extracted
    provider_namespace, name_segments, has_variable_name = extracted.value

    expanded = expand_resource_types(operation, name_segments)
    if isinstance(expanded, Failure):
        return expanded

    return Success([
        ResourceDescriptor(
            scope_type=scope_type,
            provider_namespace=provider_namespace,
            resource_type_segments=segments,
            api_version=api_version,
            has_variable_name=has_variable_name,
            metadata=operation.metadata,
        )
        for segments in expanded.value
    ])


def parse_resource_method(
    operation: OperationDescriptor, api_version: str
) -> ParseResult[list[ResourceDescriptor]]:
    """Parse a resource PUT operation into its resource descriptors."""
    scoped = classify_scope(operation.url)
    if isinstance(scoped, Failure):
        return scoped
    scope_type, routing_scope = scoped.value

    return parse_resource_descriptors(operation, api_version, scope_type, routing_scope)


def parse_list_action_method(
    operation: OperationDescriptor, api_version: str
) -> ParseResult[tuple[list[ResourceDescriptor], str]]:
    """Parse a POST list action into the owning resource's descriptors and the action name.

    ``.../providers/Microsoft.Foo/bars/{barName}/listSecrets`` describes the
    ``listSecrets`` action of ``Microsoft.Foo/bars``.
    """
    scoped = classify_scope(operation.url)
    if isinstance(scoped, Failure):
        return scoped
    scope_type, routing_scope = scoped.value

    resource_routing_scope, sep, action_name = routing_scope.rpartition("/")
    if not sep:
        return Failure("Unable to locate action name segment")

    parsed = parse_resource_descriptors(operation, api_version, scope_type, resource_routing_scope)
    if isinstance(parsed, Failure):
        return parsed

    return Success((parsed.value, action_name))
