"""RefResolver - Resolves $ref pointers in API description documents."""

from pathlib import Path
from typing import Any

from .detect import LoaderError, load_document

MAX_REF_DEPTH = 32


class RefResolver:
    """Resolves JSON $ref pointers relative to one document.

    Supports internal references (``#/parameters/Foo``) and references into
    other files relative to the document (``../common.json#/parameters/Foo``).
    Referenced files are loaded once and shared between the resolvers of one
    loading run.

    Example::

        resolver = RefResolver(doc, Path("specs/foo.json"))
        param, param_resolver = resolver.deref({"$ref": "#/parameters/Kind"})

    Args:
        document: The loaded document.
        path: Where the document was loaded from.
        cache: Loaded documents by resolved path, shared between resolvers.
    """

    def __init__(self, document: dict[str, Any], path: Path, cache: dict[Path, dict[str, Any]] | None = None) -> None:
        self.document = document
        self.path = path
        self._cache = cache if cache is not None else {}
        self._cache.setdefault(path.resolve(), document)

    def resolve(self, ref: str) -> tuple[dict[str, Any], "RefResolver"]:
        """Resolve one $ref string.

        Returns:
            The target node and the resolver its own refs are relative to.

        Raises:
            LoaderError: If the file or pointer cannot be resolved.
        """
        file_part, _, pointer = ref.partition("#")
        resolver = self._resolver_for(file_part) if file_part else self

        current: Any = resolver.document
        for part in [p for p in pointer.split("/") if p]:
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(current, dict) or part not in current:
                raise LoaderError(f"Unresolvable reference '{ref}' in {self.path}")
            current = current[part]

        if not isinstance(current, dict):
            raise LoaderError(f"Reference '{ref}' in {self.path} does not point to an object")
        return current, resolver

    def deref(self, node: dict[str, Any]) -> tuple[dict[str, Any], "RefResolver"]:
        """Follow $ref chains until a node without $ref is reached."""
        resolver = self
        for _ in range(MAX_REF_DEPTH):
            if "$ref" not in node:
                return node, resolver
            node, resolver = resolver.resolve(node["$ref"])
        raise LoaderError(f"Reference chain too deep in {self.path}")

    def _resolver_for(self, relative: str) -> "RefResolver":
        target = (self.path.parent / relative).resolve()
        if target not in self._cache:
            self._cache[target] = load_document(target)
        return RefResolver(self._cache[target], target, self._cache)
