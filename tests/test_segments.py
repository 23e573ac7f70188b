from arm_type_catalog.parser.base import EnumType, EnumValue, OperationDescriptor, Parameter, PrimaryType
from arm_type_catalog.processor.result import Failure, Success
from arm_type_catalog.processor.segments import (
    expand_resource_types,
    extract_name_segments,
    is_path_variable,
    trim_param_braces,
)


def _enum(name: str, *values: str) -> Parameter:
    return Parameter(
        serialized_name=name,
        model_type=EnumType(values=[EnumValue(name=v, serialized_name=v) for v in values]),
    )


def _op(*parameters: Parameter) -> OperationDescriptor:
    return OperationDescriptor(method="PUT", url="/providers/Microsoft.Foo/x", parameters=list(parameters))


class TestPathVariables:
    def test_is_path_variable(self):
        assert is_path_variable("{barName}")
        assert not is_path_variable("bars")
        assert not is_path_variable("{bar")
        assert not is_path_variable("")

    def test_trim_braces(self):
        assert trim_param_braces("{barName}") == "barName"


class TestExtractNameSegments:
    def test_alternating_type_and_name_tokens(self):
        result = extract_name_segments("Microsoft.Foo/bars/{barName}/bazs/{bazName}")
        assert result == Success(("Microsoft.Foo", ["bars", "bazs"], True))

    def test_literal_trailing_name(self):
        result = extract_name_segments("Microsoft.Foo/bars/{barName}/settings/default")
        assert result.value[2] is False

    def test_type_without_instance_name(self):
        result = extract_name_segments("Microsoft.Foo/bars")
        assert result.value == ("Microsoft.Foo", ["bars"], False)

    def test_parameterized_namespace_fails(self):
        result = extract_name_segments("{providerNamespace}/bars/{barName}")
        assert isinstance(result, Failure)
        assert "parameterized provider namespace '{providerNamespace}'" in result.reason

    def test_namespace_only_fails(self):
        result = extract_name_segments("Microsoft.Foo")
        assert isinstance(result, Failure)
        assert result.reason == "Unable to find name segments"

    def test_empty_routing_scope_fails(self):
        assert isinstance(extract_name_segments(""), Failure)


class TestExpandResourceTypes:
    def test_literal_segments_do_not_branch(self):
        result = expand_resource_types(_op(), ["bars", "bazs"])
        assert result.value == [("bars", "bazs")]

    def test_cartesian_order_leftmost_slowest(self):
        op = _op(_enum("first", "A", "B"), _enum("second", "X", "Y"))
        result = expand_resource_types(op, ["{first}", "sub", "{second}"])
        assert result.value == [
            ("A", "sub", "X"),
            ("A", "sub", "Y"),
            ("B", "sub", "X"),
            ("B", "sub", "Y"),
        ]

    def test_enum_declaration_order_kept(self):
        op = _op(_enum("kind", "zeta", "alpha", "mu"))
        result = expand_resource_types(op, ["{kind}"])
        assert result.value == [("zeta",), ("alpha",), ("mu",)]

    def test_uses_serialized_enum_values(self):
        param = Parameter(
            serialized_name="kind",
            model_type=EnumType(values=[EnumValue(name="Widgets", serialized_name="widgets")]),
        )
        result = expand_resource_types(_op(param), ["{kind}"])
        assert result.value == [("widgets",)]

    def test_undefined_parameter_fails(self):
        result = expand_resource_types(_op(), ["bars", "{kind}"])
        assert isinstance(result, Failure)
        assert result.reason == "Found undefined parameter reference {kind}"

    def test_non_enum_parameter_fails(self):
        op = _op(Parameter(serialized_name="kind", model_type=PrimaryType(name="string")))
        result = expand_resource_types(op, ["{kind}"])
        assert result.reason == "Parameter reference {kind} is not defined as an enum"

    def test_untyped_parameter_fails(self):
        result = expand_resource_types(_op(Parameter(serialized_name="kind")), ["{kind}"])
        assert "is not defined as an enum" in result.reason

    def test_empty_enum_fails(self):
        result = expand_resource_types(_op(_enum("kind")), ["{kind}"])
        assert isinstance(result, Failure)
        assert "doesn't have any specified values" in result.reason

    def test_lookup_is_case_sensitive(self):
        result = expand_resource_types(_op(_enum("Kind", "a")), ["{kind}"])
        assert isinstance(result, Failure)
