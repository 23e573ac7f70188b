"""Catalogue generator: turns provider definitions into a plain-data catalogue."""

import json
from typing import Protocol, TypeVar

import yaml

from arm_type_catalog.processor.providers import ProviderDefinition

T_co = TypeVar("T_co", covariant=True)


class ProviderGenerator(Protocol[T_co]):
    """Consumes one provider definition per call and produces its output."""

    def generate(self, provider: ProviderDefinition) -> T_co: ...


class CatalogGenerator:
    """Summarizes a provider definition as a dict ready for YAML/JSON output."""

    def generate(self, provider: ProviderDefinition) -> dict:
        return {
            "namespace": provider.namespace,
            "apiVersion": provider.api_version,
            "resources": [
                {
                    "type": definition.descriptor.full_type,
                    "scope": definition.descriptor.scope_type.value,
                    "hasVariableName": definition.descriptor.has_variable_name,
                    "putOperationId": definition.declaring_method.operation_id,
                    "getOperationId": definition.get_method.operation_id if definition.get_method else None,
                }
                for definition in provider.resource_definitions
            ],
            "listActions": [
                {
                    "type": action.descriptor.full_type,
                    "action": action.action_name,
                    "scope": action.descriptor.scope_type.value,
                    "operationId": action.declaring_method.operation_id,
                }
                for action in provider.resource_list_actions
            ],
        }


def build_catalog(passes: dict[str, list[ProviderDefinition]]) -> dict[str, list[dict]]:
    """Catalogue for several passes: {api_version: [provider summary, ...]}."""
    generator = CatalogGenerator()
    return {version: [generator.generate(p) for p in providers] for version, providers in passes.items()}


def render_catalog(catalog: dict, fmt: str = "yaml") -> str:
    """Render a catalogue as 'yaml' or 'json' text."""
    if fmt == "json":
        return json.dumps(catalog, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(catalog, sort_keys=False, default_flow_style=False)
    raise ValueError(f"Unsupported output format: {fmt}")
