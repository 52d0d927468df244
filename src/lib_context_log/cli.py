"""CLI adapter for ``lib_context_log`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators see exactly how a line renders through the stdlib backend
(levels, static fields, context enrichment) without writing Python, and give
shell scripts a way to log through the same pipeline as the application.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_levels` – lists the supported levels in severity order.
* :func:`cli_emit` – emits one line through :func:`lib_context_log.core.std_log`.
* :func:`cli_fail` – raises deterministically to exercise error output.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root and the
public application API only. ``lib_cli_exit_tools`` centralises the exit code
strategy; a ``fatal`` emission ends with status 1 through the exit hook.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from importlib import metadata
from typing import Final, Iterator, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env.default import DefaultEnvLoader
from .adapters.stdlog.default import TRACE_LEVEL_NUM
from .application.enrichment import EnrichmentRegistry, enrich_from_value
from .core import std_log
from .domain.context import BACKGROUND
from .domain.levels import Level
from .domain.settings import LogSettings
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

LEVEL_CHOICES: Final[tuple[str, ...]] = tuple(str(level).lower() for level in sorted(Level, reverse=True))


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_context_log")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Context-enriched logging front end",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_context_log",
    message="lib_context_log version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_context_log")
    except metadata.PackageNotFoundError:
        click.echo("lib_context_log (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_context_log')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """List levels from most to least severe.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["levels"]).output.splitlines()[0]
    '0 Fatal'
    """

    for level in Level:
        click.echo(f"{int(level)} {level}")


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option(
    "--level",
    type=click.Choice(LEVEL_CHOICES, case_sensitive=False),
    default="info",
    show_default=True,
    help="Severity of the emitted line; 'fatal' exits with status 1",
)
@click.option("--field", "fields", multiple=True, help="One-off field as name=value (repeatable)")
@click.option(
    "--context",
    "context_values",
    multiple=True,
    help="Context value as name=value, copied into a field by enrichment (repeatable)",
)
@click.option("--logger", "logger_name", default=None, help="stdlib logger name (overrides LIB_CONTEXT_LOG_LOGGER)")
def cli_emit(
    message: str,
    level: str,
    fields: Sequence[str],
    context_values: Sequence[str],
    logger_name: Optional[str],
) -> None:
    """Emit MESSAGE through the stdlib backend and print the rendered line.

    Environment settings (``LIB_CONTEXT_LOG_LEVEL``, ``LIB_CONTEXT_LOG_FIELDS__*``)
    apply as they would in an application.
    """

    settings = DefaultEnvLoader().settings()
    if logger_name:
        settings = LogSettings(threshold=settings.threshold, logger_name=logger_name, fields=settings.fields)

    registry = EnrichmentRegistry()
    context = BACKGROUND
    for name, value in _parse_pairs(context_values, "--context"):
        context = context.with_value(name, value)
        registry.register(enrich_from_value(name, name))

    entry = std_log(context, settings=settings, registry=registry).new_entry()
    for name, value in _parse_pairs(fields, "--field"):
        entry = entry.with_field(name, value)

    with _echo_handler(settings.logger_name):
        method = getattr(entry, str(Level.parse(level)).lower())
        method(message)


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling."""

    i_should_fail()


def _parse_pairs(values: Sequence[str], option: str) -> list[tuple[str, str]]:
    """Split ``name=value`` pairs, rejecting entries without ``=``."""

    pairs: list[tuple[str, str]] = []
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected name=value, got {value!r}", param_hint=option)
        pairs.append((name, rest))
    return pairs


@contextmanager
def _echo_handler(logger_name: str) -> Iterator[logging.Logger]:
    """Route records of *logger_name* to stdout for the duration of a block."""

    logger = logging.getLogger(logger_name)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level, previous_propagate = logger.level, logger.propagate
    logger.addHandler(handler)
    logger.setLevel(TRACE_LEVEL_NUM)
    logger.propagate = False
    try:
        yield logger
    finally:
        handler.flush()
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
        logger.propagate = previous_propagate


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_context_log",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
