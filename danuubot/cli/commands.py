"""CLI commands for DanuuBot."""

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from danuubot import __version__, __logo__

app = typer.Typer(
    name="danuubot",
    help=f"{__logo__} DanuuBot - WhatsApp command and automation bot",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} DanuuBot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """DanuuBot - WhatsApp command and automation bot."""
    pass


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


# ============================================================================
# Onboard / Setup
# ============================================================================


@app.command()
def onboard():
    """Write a default configuration file."""
    from danuubot.config.loader import get_config_path, save_config
    from danuubot.config.schema import Config

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")

    console.print(f"\n{__logo__} DanuuBot is ready!")
    console.print("\nNext steps:")
    console.print("  1. Start the WhatsApp bridge (default [cyan]http://localhost:3001[/cyan])")
    console.print("  2. Run: [cyan]danuubot run[/cyan] and scan the QR code")


# ============================================================================
# Run
# ============================================================================


def build_bot(config, client=None):
    """
    Wire the client, handlers, router and supervisor from configuration.

    Returns:
        The connection supervisor, ready to ``run()``.
    """
    from danuubot.auto_reply.automation import AutomationHandlers
    from danuubot.auto_reply.cache import MessageCache
    from danuubot.auto_reply.dispatch import CommandDispatcher
    from danuubot.auto_reply.flags import FeatureFlags
    from danuubot.channels.whatsapp import BridgeClient
    from danuubot.daemon.pairing import show_pairing_qr
    from danuubot.daemon.supervisor import ConnectionSupervisor
    from danuubot.routing.router import EventRouter

    client = client or BridgeClient(config.bridge)
    flags = FeatureFlags.from_config(config.features)
    prefix = config.commands.prefix

    dispatcher = CommandDispatcher(client, flags, prefix=prefix)
    automation = AutomationHandlers(
        client,
        flags,
        cache=MessageCache(max_size=config.anti_delete.cache_size),
        reactions=config.reactions,
        prefix=prefix,
    )
    router = EventRouter(dispatcher, automation)

    return ConnectionSupervisor(
        client,
        router,
        config=config.reconnect,
        on_qr=lambda qr: show_pairing_qr(qr, console),
    )


def print_session_stats(supervisor, out: Console | None = None) -> None:
    """Print connection, routing, command and anti-delete counters for a session."""
    out = out or console
    stats = supervisor.router.get_stats()
    dispatcher = stats["dispatcher"]
    cache = stats["cache"]

    table = Table(title="Session")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Connection state", supervisor.get_status()["state"])
    table.add_row("Events routed", str(stats["events_routed"]))
    table.add_row("Handler errors", str(stats["handler_errors"]))
    table.add_row("Commands run", str(dispatcher["dispatched_count"]))
    table.add_row("Command errors", str(dispatcher["error_count"]))
    table.add_row("Cached messages", f"{cache['total_entries']}/{cache['max_size']}")
    table.add_row("Deleted messages recovered", str(cache["total_hits"]))
    table.add_row("Recovery hit rate", cache["hit_rate"])
    out.print(table)


@app.command()
def run(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Connect to WhatsApp and start answering messages."""
    from danuubot.config.loader import load_config

    config = load_config()
    configure_logging("DEBUG" if verbose else config.logging.level)

    console.print(f"{__logo__} Starting DanuuBot via bridge at {config.bridge.url}...")

    supervisor = build_bot(config)

    async def main_loop():
        try:
            state = await supervisor.run()
            console.print(f"[yellow]Supervisor finished in state: {state.value}[/yellow]")
        finally:
            await supervisor.stop()
            print_session_stats(supervisor)

    try:
        asyncio.run(main_loop())
    except KeyboardInterrupt:
        console.print("\nShutting down...")


# ============================================================================
# Status
# ============================================================================


@app.command()
def status():
    """Show configuration and the command table."""
    from danuubot.auto_reply.dispatch import build_default_registry
    from danuubot.config.loader import get_config_path, load_config

    config_path = get_config_path()
    config = load_config()

    console.print(f"{__logo__} DanuuBot Status\n")
    console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[red]✗[/red]'}")
    console.print(f"Bridge: [cyan]{config.bridge.url}[/cyan] (auth dir: {config.bridge.auth_dir})")

    table = Table(title="Automations")
    table.add_column("Feature", style="cyan")
    table.add_column("Default", style="green")
    table.add_row("Auto status view", "✓" if config.features.auto_status_view else "✗")
    table.add_row("Anti-delete", "✓" if config.features.anti_delete else "✗")
    table.add_row("Auto-react", config.reactions.auto_react_emoji)
    console.print(table)

    registry = build_default_registry(config.commands.prefix)
    commands_table = Table(title="Commands")
    commands_table.add_column("Command", style="cyan")
    commands_table.add_column("Match", style="yellow")
    commands_table.add_column("Description")
    for rule in registry.rules:
        commands_table.add_row(" / ".join(rule.triggers), rule.kind.value, rule.help_text)
    console.print(commands_table)


if __name__ == "__main__":
    app()
