"""Class name formats.

Bytecode tooling reports class names in the internal form (``a/b/Widget``)
while reflection and user configuration usually spell them canonically
(``a.b.Widget``). Class matchers compare strings verbatim, so the two forms
never meet inside a matcher: InvocationCountMatcher converts incoming names
into its declared format before delegating, and the factories convert literal
names into that same format at construction.
"""

from __future__ import annotations

from enum import Enum


class ClassNameFormat(Enum):
    """Separator convention a matcher's class names are expressed in."""

    INTERNAL = "internal"
    CANONICAL = "canonical"


def to_internal_name(name: str) -> str:
    """``a.b.Widget`` -> ``a/b/Widget``. Already-internal names pass through."""
    return name.replace(".", "/")


def to_canonical_name(name: str) -> str:
    """``a/b/Widget`` -> ``a.b.Widget``. Already-canonical names pass through."""
    return name.replace("/", ".")


def normalize_class_name(name: str, fmt: ClassNameFormat) -> str:
    """Convert a class name, given in either form, into ``fmt``."""
    match fmt:
        case ClassNameFormat.INTERNAL:
            return to_internal_name(name)
        case ClassNameFormat.CANONICAL:
            return to_canonical_name(name)
