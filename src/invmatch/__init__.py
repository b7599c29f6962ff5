"""invmatch: select JVM call sites whose invocations should be counted.

An InvocationCountMatcher pairs a class matcher with a method matcher. An
instrumentation agent asks ``class_matches`` once per loaded class and
``method_matches`` per candidate method to decide where to insert counting
probes.

All public types are exported from this module for flat imports:

    from invmatch import for_name, InvocationCountMatcher, ClassRegex
"""

__version__ = "0.1.0"

# Class matchers
from invmatch._class_matchers import (
    ClassMatcher,
    ClassRegex,
    ExactClassName,
    describe_class_matcher,
)

# Config types, see invmatch._config for the document shape
from invmatch._config import (
    MAX_MATCHERS,
    MAX_NAME_LENGTH,
    MAX_REGEX_PATTERN_LENGTH,
    ClassMatchConfig,
    MatcherConfig,
    MethodMatchConfig,
    load_matcher,
    load_matchers,
    parse_matcher_config,
    parse_matcher_configs,
)

# Descriptors and reflection handles
from invmatch._descriptors import (
    PRIMITIVE_DESCRIPTORS,
    ClassRef,
    MethodRef,
    is_valid_method_descriptor,
    method_descriptor,
    parse_method_descriptor,
    type_descriptor,
)
from invmatch._errors import (
    ClassNameFormatError,
    ConfigParseError,
    InvalidDescriptorError,
    InvalidPatternError,
    MatcherError,
    PatternTooLongError,
)

# Matcher and factories
from invmatch._matcher import (
    InvocationCountMatcher,
    allocations,
    for_class,
    for_name,
    for_regex,
)

# Method matchers
from invmatch._method_matchers import (
    CONSTRUCTOR_NAME,
    STATIC_INITIALIZER_NAME,
    ExactMethodName,
    FullSignature,
    MethodMatcher,
    MethodRegex,
    describe_method_matcher,
)
from invmatch._names import (
    ClassNameFormat,
    normalize_class_name,
    to_canonical_name,
    to_internal_name,
)

__all__ = [
    # Errors
    "MatcherError",
    "InvalidPatternError",
    "PatternTooLongError",
    "InvalidDescriptorError",
    "ConfigParseError",
    "ClassNameFormatError",
    # Class names
    "ClassNameFormat",
    "normalize_class_name",
    "to_internal_name",
    "to_canonical_name",
    # Descriptors
    "ClassRef",
    "MethodRef",
    "PRIMITIVE_DESCRIPTORS",
    "type_descriptor",
    "method_descriptor",
    "parse_method_descriptor",
    "is_valid_method_descriptor",
    # Class matchers
    "ClassMatcher",
    "ExactClassName",
    "ClassRegex",
    "describe_class_matcher",
    # Method matchers
    "MethodMatcher",
    "ExactMethodName",
    "MethodRegex",
    "FullSignature",
    "CONSTRUCTOR_NAME",
    "STATIC_INITIALIZER_NAME",
    "describe_method_matcher",
    # Matcher
    "InvocationCountMatcher",
    "allocations",
    "for_name",
    "for_class",
    "for_regex",
    # Config
    "ClassMatchConfig",
    "MethodMatchConfig",
    "MatcherConfig",
    "parse_matcher_config",
    "parse_matcher_configs",
    "load_matcher",
    "load_matchers",
    "MAX_NAME_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
    "MAX_MATCHERS",
]
