"""Scope classification of resource URL templates."""

import re
from enum import Enum

from arm_type_catalog.processor.result import Failure, ParseResult, Success


class ScopeType(str, Enum):
    UNKNOWN = "Unknown"
    TENANT = "Tenant"
    SUBSCRIPTION = "Subscription"
    RESOURCE_GROUP = "ResourceGroup"
    MANAGEMENT_GROUP = "ManagementGroup"
    EXTENSION = "Extension"


# Greedy ".*" makes this match up to the rightmost "/providers/".
PARENT_SCOPE_PREFIX = re.compile(r"^.*/providers/", re.IGNORECASE)

# Evaluated in order, first match wins. A management group scope also
# matches the extension rule.
SCOPE_RULES: list[tuple[re.Pattern, ScopeType]] = [
    (re.compile(r"^/$"), ScopeType.TENANT),
    (
        re.compile(r"^/providers/Microsoft\.Management/managementGroups/\{\w+\}/$", re.IGNORECASE),
        ScopeType.MANAGEMENT_GROUP,
    ),
    (
        re.compile(r"^/subscriptions/\{\w+\}/resourceGroups/\{\w+\}/$", re.IGNORECASE),
        ScopeType.RESOURCE_GROUP,
    ),
    (re.compile(r"^/subscriptions/\{\w+\}/$", re.IGNORECASE), ScopeType.SUBSCRIPTION),
    (PARENT_SCOPE_PREFIX, ScopeType.EXTENSION),
]


def classify_parent_scope(parent_scope: str) -> ScopeType:
    """Classify the part of a URL preceding its final ``providers/`` segment."""
    for pattern, scope_type in SCOPE_RULES:
        if pattern.search(parent_scope):
            return scope_type
    return ScopeType.UNKNOWN


def classify_scope(url: str) -> ParseResult[tuple[ScopeType, str]]:
    """Split a URL template into its scope type and routing scope.

    ``/subscriptions/{s}/providers/Microsoft.Foo/bars/{b}`` yields
    ``(ScopeType.SUBSCRIPTION, "Microsoft.Foo/bars/{b}")``.
    """
    match = PARENT_SCOPE_PREFIX.match(url)
    if match is None:
        return Failure("Unable to locate '/providers/' segment")

    parent_scope = url[: match.end() - len("providers/")]
    routing_scope = url[match.end():].strip("/")

    return Success((classify_parent_scope(parent_scope), routing_scope))
