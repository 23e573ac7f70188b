"""Resource type segment extraction and enum expansion."""

from arm_type_catalog.parser.base import EnumType, OperationDescriptor
from arm_type_catalog.processor.result import Failure, ParseResult, Success


def is_path_variable(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def trim_param_braces(segment: str) -> str:
    return segment[1:-1]


def extract_name_segments(routing_scope: str) -> ParseResult[tuple[str, list[str], bool]]:
    """Split a routing scope into its namespace and resource type name tokens.

    ``Microsoft.Foo/bars/{barName}/bazs/default`` gives namespace
    ``Microsoft.Foo``, name segments ``["bars", "bazs"]`` and a
    ``has_variable_name`` of False, since the trailing instance name is literal.
    """
    tokens = routing_scope.split("/")
    provider_namespace = tokens[0]
    if is_path_variable(provider_namespace):
        return Failure(f"Unable to process parameterized provider namespace '{provider_namespace}'")

    name_segments = tokens[1::2]
    if not name_segments:
        return Failure("Unable to find name segments")

    has_variable_name = is_path_variable(tokens[-1])
    return Success((provider_namespace, name_segments, has_variable_name))


def expand_resource_types(
    operation: OperationDescriptor, name_segments: list[str]
) -> ParseResult[list[tuple[str, ...]]]:
    """Resolve name segments into every concrete resource type path.

    Placeholder segments must reference an enum parameter of the operation;
    each in-progress path branches once per enum value. Earlier segments vary
    slowest, so ``{a}/sub/{b}`` with a=[A, B] and b=[X, Y] gives
    A/sub/X, A/sub/Y, B/sub/X, B/sub/Y.
    """
    resource_types: list[tuple[str, ...]] = [()]
    for segment in name_segments:
        if not is_path_variable(segment):
            resource_types = [path + (segment,) for path in resource_types]
            continue

        parameter = operation.find_parameter(trim_param_braces(segment))
        if parameter is None:
            return Failure(f"Found undefined parameter reference {segment}")

        parameter_type = parameter.model_type
        if not isinstance(parameter_type, EnumType):
            return Failure(f"Parameter reference {segment} is not defined as an enum")

        if not parameter_type.values:
            return Failure(
                f"Parameter reference {segment} is defined as an enum, but doesn't have any specified values"
            )

        resource_types = [
            path + (value.serialized_name,)
            for path in resource_types
            for value in parameter_type.values
        ]

    return Success(resource_types)
