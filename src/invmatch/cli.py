"""Command-line interface for checking matcher configurations.

Usage:
    invmatch check matchers.yaml com/app/Widget render "(I)V"
    invmatch descriptor void int java.lang.String

``check`` prints ``true`` or ``false`` and exits 0 on a match, 1 otherwise.
Configuration errors exit 2 with a one-line message, so a broken config can
gate instrumentation in scripts.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml

from invmatch._config import load_matchers
from invmatch._descriptors import method_descriptor
from invmatch._errors import InvalidDescriptorError, MatcherError
from invmatch._matcher import InvocationCountMatcher

logger = logging.getLogger(__name__)


class ConfigError(click.ClickException):
    """A matcher configuration could not be loaded."""

    exit_code = 2


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log matcher construction at DEBUG level.")
def cli(verbose: bool) -> None:
    """Check which classes and methods a matcher configuration selects."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("config", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("class_name")
@click.argument("method_name", required=False)
@click.argument("descriptor", required=False, default="")
@click.pass_context
def check(
    ctx: click.Context,
    config: Path,
    class_name: str,
    method_name: str | None,
    descriptor: str,
) -> None:
    """Evaluate CLASS_NAME (and optionally METHOD_NAME DESCRIPTOR) against CONFIG.

    With several matchers in CONFIG, any one matching is enough. Without
    METHOD_NAME only the class check runs.
    """
    matchers = _load_config(config)
    matched = any(_evaluate(m, class_name, method_name, descriptor) for m in matchers)
    click.echo("true" if matched else "false")
    ctx.exit(0 if matched else 1)


@cli.command()
@click.argument("return_type")
@click.argument("parameter_types", nargs=-1)
def descriptor(return_type: str, parameter_types: tuple[str, ...]) -> None:
    """Print the method descriptor for RETURN_TYPE and PARAMETER_TYPES."""
    try:
        click.echo(method_descriptor(parameter_types, return_type))
    except InvalidDescriptorError as e:
        raise ConfigError(str(e)) from e


def _load_config(path: Path) -> tuple[InvocationCountMatcher, ...]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"{path}: invalid YAML: {e}"
        raise ConfigError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"{path}: not valid UTF-8: {e.reason}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"{path}: cannot read: {e.strerror}"
        raise ConfigError(msg) from e

    try:
        matchers = load_matchers(data)
    except MatcherError as e:
        msg = f"{path}: {e}"
        raise ConfigError(msg) from e

    logger.debug("loaded %d matcher(s) from %s", len(matchers), path)
    return matchers


def _evaluate(
    matcher: InvocationCountMatcher,
    class_name: str,
    method_name: str | None,
    descriptor: str,
) -> bool:
    if not matcher.class_matches(class_name):
        return False
    if method_name is None:
        return True
    return matcher.method_matches(method_name, descriptor)


def main() -> None:
    cli(prog_name="invmatch")
