"""Error types for invmatch.

Every error the package raises derives from MatcherError. All of them are
raised while a matcher is being built; ``matches`` never raises.
"""

from __future__ import annotations


class MatcherError(Exception):
    """Errors from matcher construction and validation."""


class InvalidPatternError(MatcherError):
    """A regular expression failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f'invalid regex pattern "{pattern}": {reason}')


class PatternTooLongError(MatcherError):
    """A pattern or literal name exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


class InvalidDescriptorError(MatcherError):
    """A type name or method descriptor violates the descriptor grammar."""

    def __init__(self, descriptor: str, reason: str) -> None:
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"invalid descriptor {descriptor!r}: {reason}")


class ConfigParseError(MatcherError):
    """Error parsing a config dict into config types."""


class ClassNameFormatError(MatcherError):
    """A literal class name is not spelled in the matcher's class name format."""

    def __init__(self, name: str, format_: str) -> None:
        self.name = name
        self.format = format_
        super().__init__(f"class name {name!r} is not in {format_} format")
