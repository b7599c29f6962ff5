"""Config types for building matchers from JSON/YAML documents.

Config-driven construction path:
  dict -> parse_matcher_config() -> MatcherConfig -> load_matcher() -> InvocationCountMatcher

Document shape (one matcher)::

    class_name_format: internal          # optional: internal | canonical
    class:  {exact: com/app/Widget}      # or {regex: "com/app/.*"}
    method: {name: render}               # or {regex: "get.*"}
                                         # or {signature: {name: render, descriptor: "(I)V"}}
                                         # or {signature: {name: render, parameters: [int], returns: void}}

``{allocations: com.app.Widget}`` is shorthand for an exact class paired with
the constructor name. Several matchers are grouped under a ``matchers`` list.

Parsing checks shape and derives descriptors from type names. Loading compiles
patterns, enforces length limits and validates descriptors, so every
configuration error surfaces before an instrumentation agent is handed a
matcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from invmatch._class_matchers import ClassMatcher, ClassRegex, ExactClassName
from invmatch._descriptors import MethodRef, parse_method_descriptor
from invmatch._errors import ConfigParseError, PatternTooLongError
from invmatch._matcher import InvocationCountMatcher
from invmatch._method_matchers import (
    CONSTRUCTOR_NAME,
    ExactMethodName,
    FullSignature,
    MethodMatcher,
    MethodRegex,
)
from invmatch._names import ClassNameFormat, normalize_class_name

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096
MAX_MATCHERS = 256

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ClassMatchConfig:
    """Which ClassMatcher to build: ``exact`` name or ``regex``."""

    variant: Literal["exact", "regex"]
    value: str


@dataclass(frozen=True, slots=True)
class MethodMatchConfig:
    """Which MethodMatcher to build.

    ``descriptor`` is set only for the ``signature`` variant.
    """

    variant: Literal["name", "regex", "signature"]
    value: str
    descriptor: str | None = None


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Configuration for one InvocationCountMatcher."""

    class_match: ClassMatchConfig
    method_match: MethodMatchConfig
    class_name_format: ClassNameFormat = ClassNameFormat.INTERNAL


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict -> config types)
# ═══════════════════════════════════════════════════════════════════════════════

_CLASS_VARIANTS = ("exact", "regex")
_METHOD_VARIANTS = ("name", "regex", "signature")
_FORMATS = {f.value: f for f in ClassNameFormat}


def parse_matcher_config(data: dict[str, Any]) -> MatcherConfig:
    """Parse a dict into a MatcherConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    fmt = _parse_format(data.get("class_name_format", ClassNameFormat.INTERNAL.value))

    if "allocations" in data:
        if "class" in data or "method" in data:
            msg = "'allocations' cannot be combined with 'class' or 'method'"
            raise ConfigParseError(msg)
        class_name = _require_str(data["allocations"], "allocations")
        return MatcherConfig(
            class_match=ClassMatchConfig("exact", class_name),
            method_match=MethodMatchConfig("name", CONSTRUCTOR_NAME),
            class_name_format=fmt,
        )

    for key in ("class", "method"):
        if key not in data:
            msg = f"missing required field {key!r}"
            raise ConfigParseError(msg)

    return MatcherConfig(
        class_match=_parse_class_match(data["class"]),
        method_match=_parse_method_match(data["method"]),
        class_name_format=fmt,
    )


def parse_matcher_configs(data: dict[str, Any]) -> tuple[MatcherConfig, ...]:
    """Parse a document holding either one matcher or a ``matchers`` list."""
    if isinstance(data, dict) and "matchers" in data:
        raw = data["matchers"]
        if not isinstance(raw, list):
            msg = f"'matchers' must be a list, got {type(raw).__name__}"
            raise ConfigParseError(msg)
        if not raw:
            msg = "'matchers' must not be empty"
            raise ConfigParseError(msg)
        return tuple(parse_matcher_config(m) for m in raw)
    return (parse_matcher_config(data),)


def _parse_format(value: Any) -> ClassNameFormat:
    fmt = _FORMATS.get(value) if isinstance(value, str) else None
    if fmt is None:
        msg = f"class_name_format must be one of {sorted(_FORMATS)}, got {value!r}"
        raise ConfigParseError(msg)
    return fmt


def _parse_class_match(data: Any) -> ClassMatchConfig:
    variant = _single_variant(data, _CLASS_VARIANTS, "class")
    return ClassMatchConfig(variant, _require_str(data[variant], f"class {variant}"))


def _parse_method_match(data: Any) -> MethodMatchConfig:
    variant = _single_variant(data, _METHOD_VARIANTS, "method")
    if variant != "signature":
        return MethodMatchConfig(variant, _require_str(data[variant], f"method {variant}"))

    sig = data["signature"]
    if not isinstance(sig, dict):
        msg = f"method signature must be a dict, got {type(sig).__name__}"
        raise ConfigParseError(msg)
    name = _require_str(sig.get("name"), "method signature name")

    if "descriptor" in sig:
        if "parameters" in sig or "returns" in sig:
            msg = "method signature takes 'descriptor' or 'parameters'/'returns', not both"
            raise ConfigParseError(msg)
        descriptor = _require_str(sig["descriptor"], "method signature descriptor")
    else:
        params = sig.get("parameters", [])
        if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
            msg = "method signature 'parameters' must be a list of type names"
            raise ConfigParseError(msg)
        returns = _require_str(sig.get("returns", "void"), "method signature returns")
        descriptor = MethodRef(name, tuple(params), returns).descriptor

    return MethodMatchConfig("signature", name, descriptor)


def _single_variant(data: Any, variants: tuple[str, ...], where: str) -> str:
    """Enforce oneof: exactly one of ``variants`` is present."""
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    present = [v for v in variants if v in data]
    if len(present) != 1:
        keys = sorted(map(str, data))
        msg = f"{where} must contain exactly one of {list(variants)}, got keys: {keys}"
        raise ConfigParseError(msg)
    return present[0]


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        msg = f"{what} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# Loading (config types -> runtime matchers)
# ═══════════════════════════════════════════════════════════════════════════════


def load_matcher(config: MatcherConfig) -> InvocationCountMatcher:
    """Build a runtime matcher from configuration.

    Raises:
        PatternTooLongError: pattern or name exceeds its length limit
        InvalidPatternError: regex fails to compile
        InvalidDescriptorError: signature descriptor violates the grammar
    """
    matcher = InvocationCountMatcher(
        _load_class_matcher(config.class_match, config.class_name_format),
        _load_method_matcher(config.method_match),
        config.class_name_format,
    )
    logger.debug("loaded matcher: %s", matcher.describe())
    return matcher


def load_matchers(data: dict[str, Any]) -> tuple[InvocationCountMatcher, ...]:
    """Parse and load a document holding one matcher or a ``matchers`` list."""
    configs = parse_matcher_configs(data)
    if len(configs) > MAX_MATCHERS:
        msg = f"too many matchers: {len(configs)} exceeds maximum {MAX_MATCHERS}"
        raise ConfigParseError(msg)
    return tuple(load_matcher(c) for c in configs)


def _load_class_matcher(config: ClassMatchConfig, fmt: ClassNameFormat) -> ClassMatcher:
    match config.variant:
        case "exact":
            _check_length(config.value, MAX_NAME_LENGTH)
            return ExactClassName(normalize_class_name(config.value, fmt))
        case "regex":
            _check_length(config.value, MAX_REGEX_PATTERN_LENGTH)
            return ClassRegex(config.value)
        case _:
            msg = f"unknown class match variant: {config.variant!r}"
            raise ConfigParseError(msg)


def _load_method_matcher(config: MethodMatchConfig) -> MethodMatcher:
    match config.variant:
        case "name":
            _check_length(config.value, MAX_NAME_LENGTH)
            return ExactMethodName(config.value)
        case "regex":
            _check_length(config.value, MAX_REGEX_PATTERN_LENGTH)
            return MethodRegex(config.value)
        case "signature":
            _check_length(config.value, MAX_NAME_LENGTH)
            descriptor = config.descriptor or ""
            _check_length(descriptor, MAX_NAME_LENGTH)
            parse_method_descriptor(descriptor)
            return FullSignature(config.value, descriptor)
        case _:
            msg = f"unknown method match variant: {config.variant!r}"
            raise ConfigParseError(msg)


def _check_length(value: str, max_: int) -> None:
    if len(value) > max_:
        raise PatternTooLongError(len(value), max_)
