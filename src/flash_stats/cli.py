"""Click-based CLI entry point for the ``flash_stats`` package."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from flash_stats.classifier.flash_stats import FlashStats
from flash_stats.errors import EmptyInputError, FlashStatsError, ProtocolViolationError
from flash_stats.logging import configure_logging, run_context
from flash_stats.reporting import build_report, format_periodic_summary
from flash_stats.settings import Settings, get_settings
from flash_stats.stats import compute_sample_stats
from flash_stats.trace import read_event_log, replay_events
from flash_stats.utilities.logging_patterns import (
    get_logger,
    log_error_with_context,
    log_operation,
)

logger = get_logger(__name__, component="cli")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Classify flash cache simulator events into counters and segment metrics.",
)
def app() -> None:
    """CLI root group."""


@app.command("replay")
@click.argument(
    "events_path",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "--period",
    "-p",
    type=click.IntRange(1),
    help="Simulator events per segment (defaults to FLASH_STATS_INST_STATS_PERIOD).",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject custom metric names outside the well-known set.",
)
@click.option(
    "--retain-erased-keys/--drop-erased-keys",
    default=None,
    help="Keep a key's lifecycle flags after it is erased.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Optional path to write the JSON report.",
)
@click.option(
    "--quiet",
    is_flag=True,
    help="Suppress the console summary (the report is still written).",
)
def replay(
    events_path: Path,
    period: int | None,
    strict: bool | None,
    retain_erased_keys: bool | None,
    output: Path | None,
    quiet: bool,
) -> None:
    """Replay a recorded event log and report the resulting metrics."""
    overrides: dict[str, object] = {}
    if period is not None:
        overrides["inst_stats_period"] = period
    if strict is not None:
        overrides["strict_metrics"] = strict
    if retain_erased_keys is not None:
        overrides["retain_erased_keys"] = retain_erased_keys
    settings = _resolve_settings().model_copy(update=overrides)

    with run_context(trace=events_path.name):
        with log_operation("replay_trace", logger=logger, trace=str(events_path)):
            try:
                events = read_event_log(events_path)
                stats = FlashStats.from_settings(settings)
                summary = replay_events(stats, events)
            except ProtocolViolationError as exc:
                log_error_with_context(exc, "replay_trace", logger=logger, **exc.context)
                raise click.ClickException(
                    f"{exc.message} (event={exc.context.get('event')}, "
                    f"key={exc.context.get('key')}, size={exc.context.get('size')}, "
                    f"flags={exc.context.get('flags')})"
                ) from exc
            except FlashStatsError as exc:
                log_error_with_context(exc, "replay_trace", logger=logger, **exc.context)
                raise click.ClickException(f"{exc.message} {exc.context}") from exc

            if summary.pending or not len(stats.segments):
                last = stats.segments.last()
                stats.collect_periodic_stats(last.utilization if last is not None else 0)

    if not quiet:
        click.echo(
            f"{events_path.name} | events={summary.events} | segments={len(stats.segments)}"
        )
        click.echo(format_periodic_summary(stats))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(build_report(stats), indent=2), encoding="utf-8")
        click.echo(f"Wrote report to {output}")


@app.command("sample-stats")
@click.argument("values", nargs=-1, type=float)
def sample_stats(values: tuple[float, ...]) -> None:
    """Print the mean and population standard deviation of VALUES."""
    try:
        mean, stddev = compute_sample_stats(values)
    except EmptyInputError as exc:
        raise click.UsageError(exc.message) from exc
    click.echo(f"mean={mean:.6g} stddev={stddev:.6g}")


def _resolve_settings() -> Settings:
    """Allow dependency injection from tests without global mutation."""
    try:
        return get_settings()
    except FlashStatsError as exc:
        raise click.ClickException(exc.message) from exc


def main() -> None:
    """Entry point compatible with setuptools-style script loading."""
    try:
        configure_logging(_resolve_settings())
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    app(prog_name="flash-stats")


if __name__ == "__main__":  # pragma: no cover - manual execution convenience
    main()
