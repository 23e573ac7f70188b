import pytest
from pydantic import ValidationError

from arm_type_catalog.parser.base import (
    EnumType,
    EnumValue,
    HttpMethod,
    OperationDescriptor,
    OperationMetadata,
    Parameter,
    PrimaryType,
)
from arm_type_catalog.processor.descriptors import ResourceDescriptor
from arm_type_catalog.processor.scope import ScopeType


class TestParameter:
    def test_create_minimal_parameter(self):
        p = Parameter(serialized_name="barName")
        assert p.serialized_name == "barName"
        assert p.location == "path"
        assert p.required is False
        assert p.model_type is None

    def test_model_type_discriminates_enum(self):
        p = Parameter.model_validate({
            "serialized_name": "kind",
            "model_type": {"kind": "enum", "values": [{"name": "A", "serialized_name": "a"}]},
        })
        assert isinstance(p.model_type, EnumType)
        assert p.model_type.values[0].serialized_name == "a"

    def test_model_type_discriminates_primary(self):
        p = Parameter.model_validate({"serialized_name": "name", "model_type": {"kind": "primary", "name": "string"}})
        assert isinstance(p.model_type, PrimaryType)


class TestOperationDescriptor:
    def test_method_is_normalized(self):
        op = OperationDescriptor(method="put", url="/providers/Microsoft.Foo/bars/{barName}")
        assert op.method == HttpMethod.PUT

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            OperationDescriptor(method="FETCH", url="/x")

    def test_metadata_properties(self):
        op = OperationDescriptor(
            method="GET",
            url="/x",
            metadata=OperationMetadata(operation_id="Bars_Get", api_versions=("2021-01-01",)),
        )
        assert op.api_versions == ("2021-01-01",)
        assert op.operation_id == "Bars_Get"

    def test_find_parameter_returns_first_match(self):
        first = Parameter(serialized_name="kind", model_type=EnumType(values=[EnumValue(name="A", serialized_name="a")]))
        second = Parameter(serialized_name="kind", location="query")
        op = OperationDescriptor(method="PUT", url="/x", parameters=[first, second])
        assert op.find_parameter("kind") is first
        assert op.find_parameter("missing") is None

    def test_serialization_roundtrip(self):
        op = OperationDescriptor(
            method="PUT",
            url="/providers/Microsoft.Foo/{kind}/{name}",
            parameters=[
                Parameter(
                    serialized_name="kind",
                    model_type=EnumType(values=[EnumValue(name="A", serialized_name="a")]),
                )
            ],
        )
        op2 = OperationDescriptor.model_validate(op.model_dump())
        assert op2 == op
        assert isinstance(op2.parameters[0].model_type, EnumType)


class TestResourceDescriptor:
    def _descriptor(self, **overrides):
        fields = dict(
            scope_type=ScopeType.RESOURCE_GROUP,
            provider_namespace="Microsoft.Foo",
            resource_type_segments=("bars", "bazs"),
            api_version="2021-01-01",
            has_variable_name=True,
        )
        fields.update(overrides)
        return ResourceDescriptor(**fields)

    def test_full_type(self):
        d = self._descriptor()
        assert d.full_type == "Microsoft.Foo/bars/bazs"
        assert d.full_type_with_api_version == "Microsoft.Foo/bars/bazs@2021-01-01"

    def test_is_immutable(self):
        d = self._descriptor()
        with pytest.raises(ValidationError):
            d.api_version = "2022-01-01"

    def test_empty_segments_rejected(self):
        with pytest.raises(ValidationError):
            self._descriptor(resource_type_segments=())

    def test_equal_descriptors_hash_equal(self):
        assert hash(self._descriptor()) == hash(self._descriptor())
