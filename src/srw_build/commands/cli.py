"""Command line access to the resolved build configuration."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import click

from .._logging import setup_logging
from ..config import ConfigError, ConfigFacade, load_config
from ..config._facade import NAMESPACES
from ..config._placeholders import PLACEHOLDER_PATTERN


@dataclass
class CliState:
    """Options shared by every sub-command; config is loaded on first use."""

    config_path: str | None = None
    _facade: ConfigFacade | None = field(default=None, repr=False)

    def facade(self) -> ConfigFacade:
        if self._facade is None:
            try:
                self._facade = load_config(self.config_path)
            except ConfigError as e:
                _fail(e)
        return self._facade  # type: ignore[return-value]


def _fail(error: Exception) -> None:
    click.secho(f"Error: {error}", fg="red", err=True)
    sys.exit(1)


def _echo_value(value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            click.echo(item)
    elif isinstance(value, Mapping):
        click.echo(json.dumps(value, indent=2))
    else:
        click.echo(value)


def _leaf_paths(node: Any, prefix: str) -> Iterator[str]:
    if isinstance(node, Mapping):
        for key, value in node.items():
            yield from _leaf_paths(value, f"{prefix}.{key}")
    else:
        yield prefix


def _placeholders_in(value: Any) -> Iterator[str]:
    if isinstance(value, Mapping):
        for item in value.values():
            yield from _placeholders_in(item)
    elif isinstance(value, list):
        for item in value:
            yield from _placeholders_in(item)
    elif isinstance(value, str):
        for match in PLACEHOLDER_PATTERN.finditer(value):
            yield match.group(0)


@click.group("srw-build")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: ./.srw-build.json, then the bundled default).",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (repeatable).")
@click.option("-q", "--quiet", count=True, help="Decrease log output (repeatable).")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also log to this file.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: int, quiet: int, log_file: str | None) -> None:
    """Inspect the configuration consumed by the build tasks."""
    setup_logging(verbose - quiet, log_file)
    ctx.obj = CliState(config_path=config_path)


@cli.command("get")
@click.argument("namespace", type=click.Choice(NAMESPACES))
@click.argument("key")
@click.option("--pre", default=None, help="Text prepended to each resolved value.")
@click.option("--post", default=None, help="Text appended to each resolved value.")
@click.pass_obj
def get_command(state: CliState, namespace: str, key: str, pre: str | None, post: str | None) -> None:
    """Print the resolved value of NAMESPACE.KEY.

    Examples:\n
        srw-build get paths public.scripts\n
        srw-build get paths public.scripts --post app.js\n
    """
    facade = state.facade()
    try:
        value = facade.resolver.resolve(namespace, key, {"pre": pre, "post": post})
    except ConfigError as e:
        _fail(e)
    _echo_value(value)


@cli.command("concat")
@click.argument("namespace", type=click.Choice(NAMESPACES))
@click.argument("keys", nargs=-1, required=True)
@click.pass_obj
def concat_command(state: CliState, namespace: str, keys: tuple[str, ...]) -> None:
    """Print the concatenation of several KEYS under NAMESPACE."""
    facade = state.facade()
    try:
        click.echo(facade.resolver.concat(namespace, *keys))
    except ConfigError as e:
        _fail(e)


@cli.command("check")
@click.pass_obj
def check_command(state: CliState) -> None:
    """Resolve every value and report unexpanded placeholders."""
    facade = state.facade()
    tree = facade.resolver.store.tree
    problems = 0
    checked = 0

    for namespace in NAMESPACES:
        if namespace not in tree:
            continue
        for index in _leaf_paths(tree[namespace], namespace):
            key = index.partition(".")[2]
            checked += 1
            try:
                value = facade.resolver.resolve(namespace, key)
            except ConfigError as e:
                click.secho(f"{index}: {e}", fg="red")
                problems += 1
                continue

            leftovers = sorted(set(_placeholders_in(value)))
            if leftovers:
                click.secho(f"{index}: unresolved {', '.join(leftovers)}", fg="yellow")
                problems += 1

    if problems:
        click.secho(f"{problems} of {checked} values have problems", fg="red")
        sys.exit(1)
    click.secho(f"All {checked} values resolved", fg="green")


def main() -> None:
    cli(prog_name="srw-build")
