"""Method descriptors and the reflection handles they are derived from.

A method descriptor encodes parameter and return types in the JVM's compact
grammar: ``(<params>)<return>``, where primitives are single letters,
references are ``L<internal/name>;`` and each array dimension adds a ``[``
prefix. ``(ILjava/lang/String;)V`` takes an int and a String and returns
nothing.

ClassRef and MethodRef play the part of reflection handles. Type names use
Java source spelling (``int``, ``java.lang.String``, ``byte[][]``) and the
descriptor is derived from them once, at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from invmatch._errors import InvalidDescriptorError
from invmatch._names import to_canonical_name, to_internal_name

PRIMITIVE_DESCRIPTORS = {
    "boolean": "Z",
    "byte": "B",
    "char": "C",
    "short": "S",
    "int": "I",
    "long": "J",
    "float": "F",
    "double": "D",
    "void": "V",
}

# JVM limit on array dimensions in a single type.
MAX_ARRAY_DIMENSIONS = 255

_FIELD_PRIMITIVES = frozenset("ZBCSIJFD")
_ILLEGAL_NAME_CHARS = frozenset(".;[()<>")


@dataclass(frozen=True, slots=True)
class ClassRef:
    """Handle to a class, identified by its binary name in either format.

    >>> ClassRef("com.app.Widget").internal_name
    'com/app/Widget'
    """

    name: str

    def __post_init__(self) -> None:
        _check_reference_name(to_internal_name(self.name), self.name)

    @property
    def canonical_name(self) -> str:
        return to_canonical_name(self.name)

    @property
    def internal_name(self) -> str:
        return to_internal_name(self.name)

    @property
    def descriptor(self) -> str:
        return f"L{self.internal_name};"


TypeName: TypeAlias = str | ClassRef


@dataclass(frozen=True, slots=True)
class MethodRef:
    """Handle to a method: its name plus parameter and return types.

    The descriptor is derived when the handle is created, so a malformed type
    name fails here rather than when a matcher is consulted.

    Raises:
        InvalidDescriptorError: If a type name cannot be encoded.
    """

    name: str
    parameter_types: tuple[TypeName, ...] = ()
    return_type: TypeName = "void"
    _descriptor: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.parameter_types, str):
            msg = "parameter_types must be a sequence of type names, not a string"
            raise InvalidDescriptorError(self.parameter_types, msg)
        object.__setattr__(self, "parameter_types", tuple(self.parameter_types))
        object.__setattr__(
            self, "_descriptor", method_descriptor(self.parameter_types, self.return_type)
        )

    @property
    def descriptor(self) -> str:
        return self._descriptor


# ═══════════════════════════════════════════════════════════════════════════════
# Encoding (type names -> descriptors)
# ═══════════════════════════════════════════════════════════════════════════════


def type_descriptor(type_name: TypeName, *, allow_void: bool = False) -> str:
    """Encode a single type name as a field (or return) descriptor.

    ``void`` is only legal as a bare return type, which callers signal with
    ``allow_void``.

    Raises:
        InvalidDescriptorError: If the type name is empty or malformed.
    """
    if isinstance(type_name, ClassRef):
        return type_name.descriptor

    base = type_name
    dims = 0
    while base.endswith("[]"):
        base = base[:-2]
        dims += 1

    if not base:
        msg = "empty type name"
        raise InvalidDescriptorError(type_name, msg)
    if dims > MAX_ARRAY_DIMENSIONS:
        msg = f"{dims} array dimensions exceed maximum {MAX_ARRAY_DIMENSIONS}"
        raise InvalidDescriptorError(type_name, msg)

    code = PRIMITIVE_DESCRIPTORS.get(base)
    if code == "V" and (dims or not allow_void):
        msg = "void is only allowed as a method return type"
        raise InvalidDescriptorError(type_name, msg)
    if code is None:
        internal = to_internal_name(base)
        _check_reference_name(internal, type_name)
        code = f"L{internal};"
    return "[" * dims + code


def method_descriptor(
    parameter_types: tuple[TypeName, ...] | list[TypeName],
    return_type: TypeName = "void",
) -> str:
    """Derive a method descriptor from parameter and return type names.

    >>> method_descriptor(["int", "java.lang.String[]"], "boolean")
    '(I[Ljava/lang/String;)Z'
    """
    params = "".join(type_descriptor(t) for t in parameter_types)
    return f"({params}){type_descriptor(return_type, allow_void=True)}"


# ═══════════════════════════════════════════════════════════════════════════════
# Decoding (descriptor strings -> components)
# ═══════════════════════════════════════════════════════════════════════════════


def parse_method_descriptor(descriptor: str) -> tuple[tuple[str, ...], str]:
    """Split a method descriptor into parameter and return type descriptors.

    >>> parse_method_descriptor("(IJ[Ljava/lang/Object;)V")
    (('I', 'J', '[Ljava/lang/Object;'), 'V')

    Raises:
        InvalidDescriptorError: If the descriptor violates the grammar.
    """
    if not descriptor.startswith("("):
        msg = "must start with '('"
        raise InvalidDescriptorError(descriptor, msg)

    params: list[str] = []
    pos = 1
    while pos < len(descriptor) and descriptor[pos] != ")":
        end = _scan_field_type(descriptor, pos)
        params.append(descriptor[pos:end])
        pos = end

    if pos >= len(descriptor):
        msg = "missing ')'"
        raise InvalidDescriptorError(descriptor, msg)
    pos += 1

    if descriptor[pos:] == "V":
        return tuple(params), "V"
    if pos >= len(descriptor):
        msg = "missing return type"
        raise InvalidDescriptorError(descriptor, msg)
    end = _scan_field_type(descriptor, pos)
    if end != len(descriptor):
        msg = f"unexpected trailing characters {descriptor[end:]!r}"
        raise InvalidDescriptorError(descriptor, msg)
    return tuple(params), descriptor[pos:end]


def is_valid_method_descriptor(descriptor: str) -> bool:
    """Check a descriptor against the grammar without raising."""
    try:
        parse_method_descriptor(descriptor)
    except InvalidDescriptorError:
        return False
    return True


def _scan_field_type(descriptor: str, start: int) -> int:
    """Return the index just past the field type beginning at ``start``."""
    pos = start
    while pos < len(descriptor) and descriptor[pos] == "[":
        pos += 1
    if pos - start > MAX_ARRAY_DIMENSIONS:
        msg = f"more than {MAX_ARRAY_DIMENSIONS} array dimensions"
        raise InvalidDescriptorError(descriptor, msg)
    if pos >= len(descriptor):
        msg = "truncated type"
        raise InvalidDescriptorError(descriptor, msg)

    code = descriptor[pos]
    if code in _FIELD_PRIMITIVES:
        return pos + 1
    if code == "L":
        semi = descriptor.find(";", pos)
        if semi == -1:
            msg = "reference type missing ';'"
            raise InvalidDescriptorError(descriptor, msg)
        _check_reference_name(descriptor[pos + 1 : semi], descriptor)
        return semi + 1

    msg = f"unexpected character {code!r} at position {pos}"
    raise InvalidDescriptorError(descriptor, msg)


def _check_reference_name(internal_name: str, reported: str) -> None:
    """Validate an internal class name such as ``java/lang/String``."""
    segments = internal_name.split("/")
    for segment in segments:
        if not segment:
            msg = "empty class name segment"
            raise InvalidDescriptorError(reported, msg)
        if any(c in _ILLEGAL_NAME_CHARS or c.isspace() for c in segment):
            msg = f"illegal character in class name segment {segment!r}"
            raise InvalidDescriptorError(reported, msg)
