"""Class matchers: decide whether a class is in scope for counting.

The variant set is closed. ClassMatcher is a union of frozen dataclasses and
callers dispatch over it with match/case.

Neither variant normalizes its input. ``matches`` compares the string it is
given, so ``com.app.Widget`` and ``com/app/Widget`` are different names here;
InvocationCountMatcher owns the conversion between the two formats.

Regex uses ``google-re2`` with full-match semantics: the whole class name
must match, a substring hit is not enough.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

import re2

from invmatch._errors import InvalidPatternError
from invmatch._names import ClassNameFormat, normalize_class_name

if TYPE_CHECKING:
    from invmatch._descriptors import ClassRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExactClassName:
    """Matches one class by exact, case-sensitive name equality."""

    name: str

    @classmethod
    def from_name(cls, name: str) -> ExactClassName:
        return cls(name)

    @classmethod
    def from_class(
        cls, class_ref: ClassRef, fmt: ClassNameFormat = ClassNameFormat.INTERNAL
    ) -> ExactClassName:
        """Build from a class handle, spelling its name in ``fmt``."""
        return cls(normalize_class_name(class_ref.name, fmt))

    def matches(self, class_name: str, /) -> bool:
        return class_name == self.name


@dataclass(frozen=True, slots=True)
class ClassRegex:
    """Matches classes whose whole name matches a regular expression.

    Package separators in the pattern must agree with the format class names
    arrive in: ``com/app/.*`` for internal names, ``com\\.app\\..*`` for
    canonical ones.

    Raises:
        InvalidPatternError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", _compile(self.pattern))

    def matches(self, class_name: str, /) -> bool:
        return self._compiled.fullmatch(class_name) is not None


# Closed set: exact name or regex.
ClassMatcher: TypeAlias = ExactClassName | ClassRegex


def describe_class_matcher(matcher: ClassMatcher) -> str:
    """Human-readable rendering used in logs and CLI output."""
    match matcher:
        case ExactClassName(name=name):
            return f"class == {name!r}"
        case ClassRegex(pattern=pattern):
            return f"class ~ /{pattern}/"
    return repr(matcher)  # pragma: no cover


def _compile(pattern: str) -> re2.Pattern[str]:
    try:
        compiled = re2.compile(pattern)
    except re2.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
    logger.debug("compiled class pattern %r", pattern)
    return compiled
