"""Command-line interface for wakehost."""

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
import yaml

from wakehost import __version__
from wakehost.config.loader import (
    ConfigError,
    HostEntry,
    apply_env_overrides,
    default_config,
    load_config,
    targets_from_config,
    validate_config,
)

DEFAULT_CONFIG = Path.home() / ".config" / "wakehost" / "config.yaml"

EXIT_CONFIG = 1
EXIT_SEND = 2
EXIT_TIMEOUT = 3

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_entries(config: str, explicit: bool) -> list[HostEntry]:
    path = Path(config)
    if path.exists():
        try:
            raw = load_config(path)
        except yaml.YAMLError as exc:
            click.echo(f"Config file is not valid YAML: {exc}", err=True)
            sys.exit(EXIT_CONFIG)
        except OSError as exc:
            click.echo(f"Cannot read config file {path}: {exc}", err=True)
            sys.exit(EXIT_CONFIG)
        if not raw:
            click.echo("Config file is empty.", err=True)
            sys.exit(EXIT_CONFIG)
    elif explicit:
        click.echo(f"Config file not found: {path}", err=True)
        sys.exit(EXIT_CONFIG)
    else:
        logger.debug("No config at %s, using built-in defaults", path)
        raw = default_config()

    errors = validate_config(raw)
    if errors:
        click.echo("Config validation errors:", err=True)
        for e in errors:
            click.echo(f"  • {e}", err=True)
        sys.exit(EXIT_CONFIG)
    return targets_from_config(raw)


def _resolve(ctx: click.Context, name: Optional[str]) -> HostEntry:
    """Pick the named host (or the first one) and apply environment overrides."""
    entries = _load_entries(ctx.obj["config"], ctx.obj.get("config_explicit", False))
    if name is None:
        entry = entries[0]
    else:
        found = next(
            (e for e in entries if name in (e.name, e.target.host_address)), None
        )
        if found is None:
            click.echo(f"Host '{name}' not found in config.", err=True)
            sys.exit(EXIT_CONFIG)
        entry = found

    try:
        return apply_env_overrides(entry)
    except ConfigError as exc:
        click.echo(str(exc), err=True)
        sys.exit(EXIT_CONFIG)


def _show_config(entry: HostEntry) -> None:
    t, p = entry.target, entry.policy
    click.echo("═" * 60)
    click.echo(f"  wakehost: {t.label}")
    click.echo("═" * 60)
    click.echo(f"  MAC address     {t.mac_address}")
    click.echo(f"  IP address      {t.host_address}")
    click.echo(f"  Broadcast IP    {t.broadcast_address}")
    click.echo(f"  WOL port        {t.port}")
    click.echo(f"  Wait            {p.max_attempts} × {p.interval_seconds:g}s")
    click.echo("")


# ── Root group ────────────────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="wakehost")
@click.option(
    "--config",
    "-c",
    default=None,
    envvar="WAKEHOST_CONFIG",
    show_default=str(DEFAULT_CONFIG),
    help="Path to wakehost config.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """wakehost: Wake-on-LAN a home-lab machine and wait until it answers.

    Without a subcommand, wakes the first configured host.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config or str(DEFAULT_CONFIG)
    ctx.obj["config_explicit"] = config is not None
    if ctx.invoked_subcommand is None:
        ctx.invoke(wake)


# ── wake command ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    help="Reachability checks after waking (overrides config)",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    help="Seconds between reachability checks (overrides config)",
)
@click.option("--dry-run", is_flag=True, help="Validate and show the packet without sending")
@click.pass_context
def wake(
    ctx: click.Context,
    name: Optional[str] = None,
    max_attempts: Optional[int] = None,
    interval: Optional[float] = None,
    dry_run: bool = False,
) -> None:
    """Wake a host (first configured host if NAME is omitted) and wait for it."""
    from wakehost.core.errors import (
        InvalidTargetError,
        ProbeError,
        WakeError,
        WakeTimeoutError,
    )
    from wakehost.core.waker import ensure_awake

    entry = _resolve(ctx, name)
    policy = entry.policy
    try:
        if max_attempts is not None:
            policy = replace(policy, max_attempts=max_attempts)
        if interval is not None:
            policy = replace(policy, interval_seconds=interval)
    except ValueError as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(EXIT_CONFIG)
    target = entry.target

    _show_config(HostEntry(target=target, policy=policy))

    if dry_run:
        from wakehost.core.target import validate
        from wakehost.core.wol import magic_packet

        try:
            validate(target)
        except InvalidTargetError as exc:
            click.echo(f"✗  {exc}", err=True)
            sys.exit(EXIT_CONFIG)
        packet = magic_packet(target.mac_address)
        click.echo(
            f"[DRY RUN] Would send {len(packet)} bytes to "
            f"{target.broadcast_address}:{target.port}:"
        )
        click.echo(packet.hex())
        return

    try:
        outcome = ensure_awake(target, policy)
    except (InvalidTargetError, ProbeError) as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(EXIT_CONFIG)
    except WakeError as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(EXIT_SEND)
    except WakeTimeoutError as exc:
        click.echo(f"✗  {target.label} did not wake up: {exc}", err=True)
        click.echo("This could mean:", err=True)
        click.echo("  • Wake-on-LAN is not enabled on the target machine", err=True)
        click.echo("  • The machine is taking longer than expected to boot", err=True)
        click.echo("  • Network connectivity issues", err=True)
        click.echo("  • Incorrect MAC or IP address", err=True)
        sys.exit(EXIT_TIMEOUT)

    if outcome.already_awake:
        click.echo(f"✓  {target.label} ({target.host_address}) is already awake; no action needed")
    else:
        click.echo(
            f"✓  {target.label} ({target.host_address}) is awake after "
            f"{outcome.attempts} check(s), {outcome.elapsed_seconds:.1f}s"
        )


# ── check command ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
@click.pass_context
def check(ctx: click.Context, name: Optional[str]) -> None:
    """Check whether a host is awake without sending a wake packet."""
    from wakehost.core.errors import ProbeError
    from wakehost.core.probe import is_reachable

    entry = _resolve(ctx, name)
    target = entry.target
    _show_config(entry)

    try:
        up = is_reachable(target.host_address, timeout=entry.policy.probe_timeout)
    except ProbeError as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(EXIT_CONFIG)

    if up:
        click.echo(f"✓  {target.label} ({target.host_address}) is awake and responding")
    else:
        click.echo(f"✗  {target.label} ({target.host_address}) is not responding to ping")
        sys.exit(1)


# ── show-config command ───────────────────────────────────────────────────────


@main.command("show-config")
@click.argument("name", required=False)
@click.pass_context
def show_config(ctx: click.Context, name: Optional[str]) -> None:
    """Show the effective configuration for a host."""
    _show_config(_resolve(ctx, name))


# ── hosts command ─────────────────────────────────────────────────────────────


@main.command()
@click.pass_context
def hosts(ctx: click.Context) -> None:
    """List all configured hosts."""
    entries = _load_entries(ctx.obj["config"], ctx.obj.get("config_explicit", False))
    click.echo(f"{'NAME':<20} {'MAC':<19} {'IP':<16} {'BROADCAST':<16} {'PORT'}")
    click.echo("─" * 78)
    for e in entries:
        t = e.target
        click.echo(
            f"{t.label:<20} {t.mac_address:<19} {t.host_address:<16} "
            f"{t.broadcast_address:<16} {t.port}"
        )


if __name__ == "__main__":
    main()
