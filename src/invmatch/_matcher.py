"""InvocationCountMatcher: selects the call sites whose invocations are counted.

An instrumentation agent consults the matcher in two separate steps:

1. ``class_matches`` once per loaded class, to decide whether the class is
   instrumented at all.
2. ``method_matches`` once per candidate method of an instrumented class, to
   decide whether a counting probe is inserted.

There is deliberately no combined query, so the per-method check is skipped
entirely for classes that fail the first step.

Class names are normalized at the ``class_matches`` boundary into the
matcher's ``class_name_format`` (internal ``a/b/C`` by default), so callers
may pass either spelling. Literal names given to the factories are converted
into the same format; regex patterns are used as written and must be
expressed in that format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invmatch._class_matchers import (
    ClassMatcher,
    ClassRegex,
    ExactClassName,
    describe_class_matcher,
)
from invmatch._method_matchers import (
    CONSTRUCTOR_NAME,
    ExactMethodName,
    FullSignature,
    MethodMatcher,
    MethodRegex,
    describe_method_matcher,
)
from invmatch._errors import ClassNameFormatError
from invmatch._names import ClassNameFormat, normalize_class_name

if TYPE_CHECKING:
    from invmatch._descriptors import ClassRef, MethodRef


@dataclass(frozen=True, slots=True)
class InvocationCountMatcher:
    """Pairs a ClassMatcher with a MethodMatcher.

    Immutable and free of shared state, so one instance can be queried from
    any number of threads.

    Raises:
        ClassNameFormatError: If an exact class name is not spelled in
            ``class_name_format``.
    """

    class_matcher: ClassMatcher
    method_matcher: MethodMatcher
    class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL

    def __post_init__(self) -> None:
        # An exact literal in the other spelling could never equal a normalized input.
        if isinstance(self.class_matcher, ExactClassName):
            name = self.class_matcher.name
            if normalize_class_name(name, self.class_name_format) != name:
                raise ClassNameFormatError(name, self.class_name_format.value)

    def class_matches(self, class_name: str) -> bool:
        """Check a class name, given in internal or canonical form."""
        return self.class_matcher.matches(
            normalize_class_name(class_name, self.class_name_format)
        )

    def method_matches(self, method_name: str, method_descriptor: str) -> bool:
        """Check a method by name and JVM method descriptor."""
        return self.method_matcher.matches(method_name, method_descriptor)

    def describe(self) -> str:
        return (
            f"{describe_class_matcher(self.class_matcher)}, "
            f"{describe_method_matcher(self.method_matcher)} "
            f"({self.class_name_format.value} names)"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════════════


def allocations(
    cls: ClassRef, *, class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL
) -> InvocationCountMatcher:
    """Match allocations of a class, i.e. calls to any of its constructors."""
    return InvocationCountMatcher(
        ExactClassName.from_class(cls, class_name_format),
        ExactMethodName(CONSTRUCTOR_NAME),
        class_name_format,
    )


def for_name(
    class_name: str,
    method_name: str,
    *,
    class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL,
) -> InvocationCountMatcher:
    """Match every overload of ``method_name`` in ``class_name``."""
    return InvocationCountMatcher(
        ExactClassName.from_name(normalize_class_name(class_name, class_name_format)),
        ExactMethodName(method_name),
        class_name_format,
    )


def for_class(
    cls: ClassRef,
    method: MethodRef,
    *,
    class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL,
) -> InvocationCountMatcher:
    """Match exactly one method, identified by name and descriptor, in a class."""
    return InvocationCountMatcher(
        ExactClassName.from_class(cls, class_name_format),
        FullSignature.from_method(method),
        class_name_format,
    )


def for_regex(
    class_pattern: str,
    method_pattern: str,
    *,
    class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL,
) -> InvocationCountMatcher:
    """Match methods whose name fully matches ``method_pattern`` in classes
    whose name fully matches ``class_pattern``.

    Raises:
        InvalidPatternError: If either pattern fails to compile.
    """
    return InvocationCountMatcher(
        ClassRegex(class_pattern),
        MethodRegex(method_pattern),
        class_name_format,
    )
