"""Aggregation of resource descriptors into provider definitions.

One call to ``generate_definitions`` is one processing pass for a single API
version. Every pass gets its own ``ProviderDefinitionsBuilder``, so passes for
different versions can run side by side.
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, TypeVar

from pydantic import BaseModel

from arm_type_catalog.parser.base import HttpMethod, OperationDescriptor
from arm_type_catalog.processor.descriptors import (
    ResourceDescriptor,
    parse_list_action_method,
    parse_resource_method,
    should_process_list_action,
    should_process_resource_type,
)
from arm_type_catalog.processor.log import LogSink
from arm_type_catalog.processor.result import Failure

if TYPE_CHECKING:
    from arm_type_catalog.generator.catalog import ProviderGenerator

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class ResourceDefinition(BaseModel):
    descriptor: ResourceDescriptor
    declaring_method: OperationDescriptor
    get_method: OperationDescriptor | None = None


class ResourceListActionDefinition(BaseModel):
    descriptor: ResourceDescriptor
    declaring_method: OperationDescriptor
    action_name: str


class ProviderDefinition(BaseModel):
    """Everything discovered for one provider namespace in one pass."""

    namespace: str
    api_version: str
    resource_definitions: list[ResourceDefinition] = []
    resource_list_actions: list[ResourceListActionDefinition] = []


class ProviderDefinitionsBuilder:
    """Collects provider definitions keyed case-insensitively by namespace.

    Thread-safe: creation is guarded by a builder-wide lock and appends by a
    per-namespace lock.
    """

    def __init__(self, api_version: str):
        self.api_version = api_version
        self._providers: dict[str, ProviderDefinition] = {}
        self._namespace_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def get_provider(self, namespace: str) -> tuple[ProviderDefinition, threading.Lock]:
        """Return the definition for a namespace, creating it on first use."""
        key = namespace.casefold()
        with self._lock:
            if key not in self._providers:
                self._providers[key] = ProviderDefinition(namespace=namespace, api_version=self.api_version)
                self._namespace_locks[key] = threading.Lock()
            return self._providers[key], self._namespace_locks[key]

    def add_resource(self, definition: ResourceDefinition) -> None:
        provider, lock = self.get_provider(definition.descriptor.provider_namespace)
        with lock:
            provider.resource_definitions.append(definition)

    def add_list_action(self, definition: ResourceListActionDefinition) -> None:
        provider, lock = self.get_provider(definition.descriptor.provider_namespace)
        with lock:
            provider.resource_list_actions.append(definition)

    def build(self) -> list[ProviderDefinition]:
        with self._lock:
            return list(self._providers.values())


def _map(func: Callable[[T], R], items: Sequence[T], max_workers: int | None) -> list[R]:
    # Results keep input order either way.
    if not max_workers or max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(func, items))


def index_get_methods(
    operations: Iterable[OperationDescriptor], api_version: str
) -> dict[str, OperationDescriptor]:
    """Map each exact URL template to its first GET applying to ``api_version``."""
    get_methods: dict[str, OperationDescriptor] = {}
    for operation in operations:
        if operation.method == HttpMethod.GET and api_version in operation.api_versions:
            get_methods.setdefault(operation.url, operation)
    return get_methods


def generate_definitions(
    operations: Sequence[OperationDescriptor] | None,
    api_version: str,
    log: LogSink | None = None,
    max_workers: int | None = None,
) -> list[ProviderDefinition]:
    """Run one processing pass and return its provider definitions.

    Operations that cannot be parsed are reported as warnings and skipped.

    Raises:
        ValueError: If ``operations`` is None.
    """
    if operations is None:
        raise ValueError("operations must not be None")

    if log is None:
        log = logger
    operations = list(operations)
    builder = ProviderDefinitionsBuilder(api_version)

    get_methods = index_get_methods(operations, api_version)
    put_methods = [op for op in operations if should_process_resource_type(op, api_version)]
    results = _map(lambda op: parse_resource_method(op, api_version), put_methods, max_workers)
    for put_method, result in zip(put_methods, results):
        if isinstance(result, Failure):
            log.warning(f"Skipping resource PUT path '{put_method.url}': {result.reason}")
            continue

        get_method = get_methods.get(put_method.url)
        for descriptor in result.value:
            builder.add_resource(
                ResourceDefinition(descriptor=descriptor, declaring_method=put_method, get_method=get_method)
            )

    action_methods = [op for op in operations if should_process_list_action(op, api_version)]
    results = _map(lambda op: parse_list_action_method(op, api_version), action_methods, max_workers)
    for action_method, result in zip(action_methods, results):
        if isinstance(result, Failure):
            log.warning(f"Skipping resource POST action path '{action_method.url}': {result.reason}")
            continue

        descriptors, action_name = result.value
        for descriptor in descriptors:
            builder.add_list_action(
                ResourceListActionDefinition(
                    descriptor=descriptor, declaring_method=action_method, action_name=action_name
                )
            )

    providers = builder.build()
    log.info(
        f"api-version {api_version}: {len(providers)} providers, "
        f"{sum(len(p.resource_definitions) for p in providers)} resource types, "
        f"{sum(len(p.resource_list_actions) for p in providers)} list actions"
    )
    return providers


def generate_types(
    operations: Sequence[OperationDescriptor] | None,
    api_version: str,
    generator: "ProviderGenerator[R]",
    log: LogSink | None = None,
) -> list[R]:
    """Run a pass and hand every provider definition to ``generator.generate``."""
    return [generator.generate(provider) for provider in generate_definitions(operations, api_version, log=log)]


def collect_api_versions(operations: Iterable[OperationDescriptor]) -> list[str]:
    versions = {version for operation in operations for version in operation.api_versions}
    return sorted(versions)


def generate_all_versions(
    operations: Sequence[OperationDescriptor] | None,
    log: LogSink | None = None,
    max_workers: int | None = None,
) -> dict[str, list[ProviderDefinition]]:
    """Run one independent pass per API version found in ``operations``."""
    if operations is None:
        raise ValueError("operations must not be None")

    operations = list(operations)
    versions = collect_api_versions(operations)
    passes = _map(lambda version: generate_definitions(operations, version, log=log), versions, max_workers)
    return dict(zip(versions, passes))
