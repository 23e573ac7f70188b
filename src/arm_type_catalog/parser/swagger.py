"""OpenAPI / Swagger document loader.

Loads Swagger 2.0 (including the ``x-ms-paths`` and ``x-ms-enum``
extensions) and OpenAPI 3.x documents into OperationDescriptor models.
"""

from pathlib import Path

from .base import EnumType, EnumValue, HttpMethod, OperationDescriptor, OperationMetadata, Parameter, PrimaryType
from .detect import LoaderError, detect_document_format, load_document
from .refs import RefResolver

PATH_SECTIONS = ("paths", "x-ms-paths")


def parse_openapi(file_path: Path, cache: dict | None = None) -> list[OperationDescriptor]:
    """Parse an OpenAPI/Swagger file into a list of OperationDescriptor.

    Every operation applies to the document's ``info.version``.

    Raises:
        LoaderError: If the file is unreadable or not an API description.
    """
    doc = load_document(file_path)
    if detect_document_format(doc) == "unknown":
        raise LoaderError(f"{file_path} is not a Swagger/OpenAPI document")

    resolver = RefResolver(doc, file_path, cache)
    api_version = str((doc.get("info") or {}).get("version", ""))
    api_versions = (api_version,) if api_version else ()

    operations = []
    for section in PATH_SECTIONS:
        for path, methods in (doc.get(section) or {}).items():
            # x-ms-paths keys may carry a query suffix to tell overloads apart.
            url = path.split("?", 1)[0]
            methods = methods or {}
            if not isinstance(methods, dict):
                raise LoaderError(f"Path item '{path}' is not an object in {file_path}")
            path_params = methods.get("parameters") or []

            for method, operation in methods.items():
                if method.upper() not in HttpMethod.__members__:
                    continue
                operation = operation or {}
                if not isinstance(operation, dict):
                    raise LoaderError(f"Operation '{method} {path}' is not an object in {file_path}")

                operations.append(
                    OperationDescriptor(
                        method=method.upper(),
                        url=url,
                        parameters=_parse_parameters(path_params, operation.get("parameters") or [], resolver),
                        metadata=OperationMetadata(
                            operation_id=operation.get("operationId", ""),
                            api_versions=api_versions,
                        ),
                        summary=operation.get("summary", "") or operation.get("description", ""),
                    )
                )

    return operations


def parse_documents(file_paths: list[Path]) -> list[OperationDescriptor]:
    """Parse several documents, keeping operations in the order given."""
    cache: dict = {}
    operations = []
    for file_path in file_paths:
        operations.extend(parse_openapi(file_path, cache))
    return operations


def _parse_parameters(path_params: list[dict], operation_params: list[dict], resolver: RefResolver) -> list[Parameter]:
    # Operation-level parameters override path-level ones with the same name and location.
    merged: dict[tuple[str, str], Parameter] = {}
    for raw in [*path_params, *operation_params]:
        if not isinstance(raw, dict):
            raise LoaderError(f"Parameter {raw!r} is not an object in {resolver.path}")
        param, param_resolver = resolver.deref(raw)
        if "name" not in param:
            raise LoaderError(f"Parameter without a name in {param_resolver.path}")
        location = param.get("in", "query")
        merged[(param["name"], location)] = Parameter(
            serialized_name=param["name"],
            location=location,
            required=param.get("required", False),
            description=param.get("description", ""),
            model_type=_parse_model_type(param, param_resolver),
        )
    return list(merged.values())


def _parse_model_type(param: dict, resolver: RefResolver) -> EnumType | PrimaryType:
    # Swagger 2.0 declares non-body types inline; OpenAPI 3 uses "schema".
    if param.get("in") == "body":
        return PrimaryType(name="object")

    source = param
    if "schema" in param:
        source, _ = resolver.deref(param["schema"])

    x_ms_enum = source.get("x-ms-enum") or {}
    if x_ms_enum.get("values"):
        values = []
        for v in x_ms_enum["values"]:
            if not isinstance(v, dict) or "value" not in v:
                raise LoaderError(
                    f"x-ms-enum value without a 'value' for parameter '{param['name']}' in {resolver.path}"
                )
            values.append(EnumValue(name=str(v.get("name", v["value"])), serialized_name=str(v["value"])))
    elif "enum" in source:
        values = [EnumValue(name=str(v), serialized_name=str(v)) for v in source["enum"] or []]
    else:
        return PrimaryType(name=source.get("type", "object"))

    return EnumType(
        name=x_ms_enum.get("name", param["name"]),
        values=values,
        model_as_string=x_ms_enum.get("modelAsString", False),
    )
