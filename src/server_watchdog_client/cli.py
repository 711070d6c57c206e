"""Command-line interface for the Server Watchdog client."""

import logging
import sys
from pathlib import Path

import click
import requests

from .client import Severity, WatchdogClient
from .config import ClientConfig
from .errors import RequestError, WatchdogClientError

logger = logging.getLogger("server_watchdog_client")


def setup_logging(level: str = "INFO"):
    """Attach a console handler to the package logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(console)


def _load_config(config_path):
    if not config_path:
        click.echo("Error: a configuration file is required (-c/--config)", err=True)
        sys.exit(1)
    try:
        return ClientConfig.from_yaml(config_path)
    except (WatchdogClientError, OSError, ValueError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)


def _run(ctx, action, description):
    """Build a client from the group options and run one call."""
    client = WatchdogClient(_load_config(ctx.obj["config_path"]))
    try:
        action(client)
    except RequestError as e:
        click.echo(f"Error: {e.message} (HTTP {e.status_code})", err=True)
        sys.exit(1)
    except (WatchdogClientError, requests.RequestException) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"✅ {description}")


@click.group()
@click.version_option(package_name="server-watchdog-client")
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def main(ctx, config_path: str, verbose: bool):
    """Server Watchdog client - send notifications and watch processes."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        setup_logging("DEBUG")


@main.command()
@click.argument("message")
@click.option("--channel", help="Channel to deliver to (defaults to default_channel)")
@click.pass_context
def error(ctx, message: str, channel: str):
    """Send an error notification."""
    _run(ctx, lambda client: client.error(message, channel), "Sent error message")


@main.command()
@click.argument("message")
@click.option("--channel", help="Channel to deliver to (defaults to default_channel)")
@click.pass_context
def warn(ctx, message: str, channel: str):
    """Send a warning notification."""
    _run(ctx, lambda client: client.warn(message, channel), "Sent warning message")


@main.command()
@click.argument("message")
@click.option("--channel", help="Channel to deliver to (defaults to default_channel)")
@click.pass_context
def info(ctx, message: str, channel: str):
    """Send an information notification."""
    _run(ctx, lambda client: client.info(message, channel), "Sent information message")


@main.command()
@click.argument("pid", type=int, required=False, default=0)
@click.option("--name", help="Description of the process (defaults to the executable path)")
@click.option(
    "--severity",
    type=click.Choice(Severity.ALL),
    default=Severity.ERROR,
    show_default=True,
    help="Severity of the alert if the process dies",
)
@click.option("--channel", help="Channel to deliver to (defaults to default_channel)")
@click.pass_context
def watch(ctx, pid: int, name: str, severity: str, channel: str):
    """Ask the server to watch process PID (defaults to this process)."""
    _run(
        ctx,
        lambda client: client.process_watch(pid, name, severity, channel),
        f"Watching process #{pid or 'self'}",
    )


@main.command()
@click.argument("pid", type=int, required=False, default=0)
@click.option("--channel", help="Channel the watch was registered on")
@click.pass_context
def unwatch(ctx, pid: int, channel: str):
    """Stop watching process PID (defaults to this process)."""
    _run(
        ctx,
        lambda client: client.process_unwatch(pid, channel),
        f"Stopped watching process #{pid or 'self'}",
    )


@main.command()
@click.pass_context
def validate(ctx):
    """Validate configuration file."""
    config = _load_config(ctx.obj["config_path"])
    click.echo("✅ Configuration is valid")
    click.echo(f"\nServer: {config.base_url}")
    click.echo(f"Default channel: {config.default_channel}")
    click.echo(f"Timeout: {config.timeout} ms")


@main.command()
@click.option("-o", "--output", type=click.Path(), help="Output file path")
def init(output: str):
    """Generate a sample configuration file."""
    sample_config = '''# Server Watchdog client configuration

host: 127.0.0.1
port: 3004
use_ssl: false
api_key: set-some-key
default_channel: default
timeout: 30000     # milliseconds
'''

    if output:
        Path(output).write_text(sample_config)
        click.echo(f"✅ Sample config written to: {output}")
    else:
        click.echo(sample_config)


if __name__ == "__main__":
    main()
