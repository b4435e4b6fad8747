"""expbackoff command-line interface."""

from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from expbackoff import __version__
from expbackoff.config import ExpBackoffConfig
from expbackoff.constants import DEFAULT_PREVIEW_ATTEMPTS, MAX_PREVIEW_ATTEMPTS
from expbackoff.logging import get_logger, setup_logging
from expbackoff.retry_backoff import ExponentialBackoff

console = Console()
logger = get_logger("cli")


@click.group()
@click.version_option(version=__version__, prog_name="expbackoff")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="Path to config YAML")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"]),
    default=None,
    help="Override configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """expbackoff - exponential retry delay policies.

    Build and inspect bounded exponential backoff schedules.
    """
    ctx.ensure_object(dict)
    try:
        config = ExpBackoffConfig.load(config_path)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    setup_logging(
        level=log_level or config.logging.level,
        log_dir=config.logging.directory,
        json_output=config.logging.structured_output,
    )
    ctx.obj["config"] = config


@click.command()
@click.option("--initial-delay", type=int, default=None, help="Initial delay in milliseconds")
@click.option("--max-delay", type=int, default=None, help="Maximum delay in milliseconds")
@click.option("--multiplier", type=float, default=None, help="Growth factor per attempt")
@click.option(
    "--attempts",
    "-n",
    type=click.IntRange(1, MAX_PREVIEW_ATTEMPTS),
    default=DEFAULT_PREVIEW_ATTEMPTS,
    show_default=True,
    help="Number of attempts to show",
)
@click.pass_context
def preview(
    ctx: click.Context,
    initial_delay: int | None,
    max_delay: int | None,
    multiplier: float | None,
    attempts: int,
) -> None:
    """Show the delay schedule for a backoff policy.

    Command-line values override the configuration file.

    Examples:

        expbackoff preview --initial-delay 100 --max-delay 10000

        expbackoff preview --multiplier 1.5 -n 20
    """
    try:
        config: ExpBackoffConfig = ctx.obj["config"]
        overrides = {
            key: value
            for key, value in (
                ("initial_delay_millis", initial_delay),
                ("max_delay_millis", max_delay),
                ("multiplier", multiplier),
            )
            if value is not None
        }
        backoff_config = config.backoff.model_copy(update=overrides)
        backoff = backoff_config.to_backoff()
        logger.debug(f"Previewing {attempts} attempts for {backoff!r}")

        show_schedule(backoff, attempts)

    except Exception as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e


def show_schedule(backoff: ExponentialBackoff, attempts: int) -> None:
    """Render the delay schedule as a table.

    Args:
        backoff: Policy to render
        attempts: Number of attempts to show
    """
    console.print(
        f"\n[bold cyan]Backoff schedule[/bold cyan] "
        f"initial={backoff.initial_delay_millis}ms "
        f"max={backoff.max_delay_millis}ms "
        f"multiplier={backoff.multiplier}\n"
    )

    table = Table(show_header=True)
    table.add_column("Attempt", justify="right")
    table.add_column("Delay (ms)", justify="right")
    table.add_column("Capped")

    for attempt, delay in enumerate(backoff.delays(attempts), start=1):
        capped = "[yellow]yes[/yellow]" if delay == backoff.max_delay_millis else ""
        table.add_row(str(attempt), str(delay), capped)

    console.print(table)


@click.command("config")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write config to file")
@click.pass_context
def config_cmd(ctx: click.Context, output: str | None) -> None:
    """Print the effective configuration as YAML."""
    config: ExpBackoffConfig = ctx.obj["config"]
    if output:
        try:
            config.save(Path(output))
        except Exception as e:
            console.print(f"\n[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1) from e
        console.print(f"[green]✓[/green] Config written to {output}")
        return
    click.echo(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False), nl=False)


cli.add_command(preview)
cli.add_command(config_cmd)


if __name__ == "__main__":
    cli()
