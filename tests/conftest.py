"""Conformance fixture loader for invmatch.

Loads YAML fixtures from tests/fixtures/ and converts them to matchers and
cases for parametrized testing. ``factories.yaml`` holds matching cases,
``invalid.yaml`` holds configurations that must fail to load.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from invmatch import InvocationCountMatcher, load_matcher, parse_matcher_config

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single matching case from a conformance fixture."""

    fixture_name: str
    case_name: str
    matcher: InvocationCountMatcher
    class_name: str
    method_name: str | None
    descriptor: str
    expect: bool

    @property
    def id(self) -> str:
        return f"{self.fixture_name}/{self.case_name}"


@dataclass
class InvalidConfigCase:
    """A configuration that must be rejected with ``error``."""

    name: str
    config: dict[str, Any]
    error: str


def load_match_fixtures() -> list[FixtureCase]:
    cases: list[FixtureCase] = []
    with (FIXTURE_DIR / "factories.yaml").open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            matcher = load_matcher(parse_matcher_config(doc["matcher"]))
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        matcher=matcher,
                        class_name=case["class"],
                        method_name=case.get("method"),
                        descriptor=case.get("descriptor", ""),
                        expect=case["expect"],
                    )
                )
    return cases


def load_invalid_fixtures() -> list[InvalidConfigCase]:
    cases: list[InvalidConfigCase] = []
    with (FIXTURE_DIR / "invalid.yaml").open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            cases.append(InvalidConfigCase(doc["name"], doc["config"], doc["error"]))
    return cases
