"""Method matchers: decide whether a method of an in-scope class is counted.

Three variants make up the closed set:

- ExactMethodName matches every overload sharing a name.
- MethodRegex matches every method whose whole name matches a pattern.
- FullSignature matches one overload by name and descriptor.

Only FullSignature looks at the descriptor. It stores the descriptor as an
opaque string and compares it for exact equality.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

import re2

from invmatch._errors import InvalidPatternError

if TYPE_CHECKING:
    from invmatch._descriptors import MethodRef

logger = logging.getLogger(__name__)

# Method names the JVM reserves for constructors and static initializers.
CONSTRUCTOR_NAME = "<init>"
STATIC_INITIALIZER_NAME = "<clinit>"


@dataclass(frozen=True, slots=True)
class ExactMethodName:
    """Matches a method name exactly. The descriptor is ignored."""

    name: str

    def matches(self, method_name: str, method_descriptor: str, /) -> bool:
        return method_name == self.name


@dataclass(frozen=True, slots=True)
class MethodRegex:
    """Matches method names with a regular expression (full match).

    The descriptor is ignored.

    Raises:
        InvalidPatternError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            raise InvalidPatternError(self.pattern, str(e)) from e
        logger.debug("compiled method pattern %r", self.pattern)
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, method_name: str, method_descriptor: str, /) -> bool:
        return self._compiled.fullmatch(method_name) is not None


@dataclass(frozen=True, slots=True)
class FullSignature:
    """Matches exactly one overload: name and descriptor must both be equal."""

    name: str
    descriptor: str

    @classmethod
    def from_method(cls, method: MethodRef) -> FullSignature:
        """Capture a method handle's name and derived descriptor."""
        return cls(method.name, method.descriptor)

    def matches(self, method_name: str, method_descriptor: str, /) -> bool:
        return method_name == self.name and method_descriptor == self.descriptor


MethodMatcher: TypeAlias = ExactMethodName | MethodRegex | FullSignature


def describe_method_matcher(matcher: MethodMatcher) -> str:
    """Human-readable rendering used in logs and CLI output."""
    match matcher:
        case ExactMethodName(name=name):
            return f"method == {name!r}"
        case MethodRegex(pattern=pattern):
            return f"method ~ /{pattern}/"
        case FullSignature(name=name, descriptor=descriptor):
            return f"method == {name!r}{descriptor}"
    return repr(matcher)  # pragma: no cover
