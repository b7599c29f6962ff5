"""Test utilities for invmatch.

Provides a minimal stand-in for the instrumentation agent that consults a
matcher. It is NOT an agent: nothing is rewritten or counted. It exists to
exercise matchers the way an agent drives them, in tests and examples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from invmatch._matcher import InvocationCountMatcher


@dataclass(frozen=True, slots=True)
class ClassInfo:
    """A loaded class as an agent sees it: a name and its (name, descriptor) methods.

    >>> ClassInfo("com/app/Widget", (("<init>", "()V"), ("render", "(I)V")))
    ClassInfo(name='com/app/Widget', methods=(('<init>', '()V'), ('render', '(I)V')))
    """

    name: str
    methods: tuple[tuple[str, str], ...] = ()


def select_call_sites(
    matcher: InvocationCountMatcher, classes: Iterable[ClassInfo]
) -> Iterator[tuple[str, str, str]]:
    """Yield ``(class, method, descriptor)`` for every method that gets a probe.

    ``class_matches`` is called once per class; methods of classes that fail
    it are never offered to ``method_matches``.
    """
    for info in classes:
        if not matcher.class_matches(info.name):
            continue
        for method_name, descriptor in info.methods:
            if matcher.method_matches(method_name, descriptor):
                yield info.name, method_name, descriptor
