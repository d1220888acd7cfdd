"""CLI interface for Redfish BMC management."""

import json
import logging
import re
from typing import Any, Dict, Optional

import click

from .client import DEFAULT_PORT, DEFAULT_TIMEOUT, Endpoint, RedfishClientPool
from .common import Boot
from .errors import RedfishError
from .model import EnabledDisabled
from .model.system import SystemPowerControl
from .model.task import Task
from .model.update_service import ComponentType
from .multi import format_multi_server_output, load_servers_from_csv, run_on_servers, to_jsonable
from .output import format_firmware_output, format_power_output, format_thermal_output
from .redfish import Redfish
from .tasks import TaskMonitor
from .tunnel import SSHTunnel


def parse_duration(duration_str: str) -> float:
    """
    Parse human-friendly duration string to seconds.

    Args:
        duration_str: Duration like "90s", "5m", "3h", "1d" or "600"

    Returns:
        Duration in seconds

    Examples:
        "5m" -> 300.0
        "1h" -> 3600.0
        "600" -> 600.0 (plain number assumes seconds)
    """
    duration_str = str(duration_str).strip().lower()

    match = re.match(r"^([\d.]+)([smhd])?$", duration_str)
    if not match:
        raise click.BadParameter(
            f"Invalid duration format: '{duration_str}'. "
            "Use formats like: 90s, 5m, 3h, 1d, 600"
        )

    value = float(match.group(1))
    unit = match.group(2) or "s"

    conversions = {
        "s": value,
        "m": value * 60,
        "h": value * 3600,
        "d": value * 86400,
    }

    return conversions[unit]


class _Group(click.Group):
    """Turns library errors into ``Error: ...`` and exit status 1."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except (RedfishError, OSError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


def _connect(ctx: click.Context) -> Redfish:
    """The facade for the BMC named by the group options, created once per invocation."""
    opts = ctx.obj
    if opts.get("redfish") is not None:
        return opts["redfish"]

    if not opts["host"] or not opts["username"] or not opts["password"]:
        raise click.UsageError("--host, --username and --password are required")

    root = ctx.find_root()
    endpoint = Endpoint(
        host=opts["host"],
        port=opts["port"],
        user=opts["username"],
        password=opts["password"],
        verify_tls=opts["verify_ssl"],
        timeout=opts["timeout"],
    )

    if opts["jumphost"] and not opts["no_tunnel"]:
        tunnel = root.with_resource(
            SSHTunnel(
                jumphost=opts["jumphost"],
                bmc_host=opts["host"],
                bmc_port=opts["port"],
                jumphost_username=opts["jumphost_user"],
                ssh_key_path=opts["ssh_key"],
                ssh_password=opts["ssh_password"],
            )
        )
        endpoint = tunnel.endpoint(endpoint)
        _info(ctx, f"SSH tunnel: localhost:{tunnel.local_bind_port} -> {opts['jumphost']} -> {opts['host']}:{opts['port']}")
    elif opts["no_tunnel"] and opts["jumphost"]:
        _info(ctx, "Warning: --no-tunnel specified, ignoring --jumphost")

    pool = root.with_resource(RedfishClientPool())
    if opts["standard"]:
        redfish = pool.create_standard_client(endpoint)
    else:
        redfish = pool.create_client(endpoint)
    opts["redfish"] = redfish
    return redfish


def _info(ctx: click.Context, message: str) -> None:
    if not ctx.obj["quiet"]:
        click.echo(message, err=True)


def _emit(ctx: click.Context, value: Any, text: Optional[str] = None) -> None:
    if ctx.obj["output_format"] == "json":
        click.echo(json.dumps(to_jsonable(value), indent=2))
    else:
        click.echo(text if text is not None else str(to_jsonable(value)))


def _format_attributes(attributes: Dict[str, Any]) -> str:
    if not attributes:
        return "(none)"
    return "\n".join(f"{key}: {attributes[key]}" for key in sorted(attributes))


def _enum_choice(enum) -> click.Choice:
    return click.Choice([e.value for e in enum], case_sensitive=False)


def _wait(ctx: click.Context, redfish: Redfish, task_id: str, timeout: float) -> Task:
    def progress(task: Task, percent: int) -> None:
        state = task.task_state.value if task.task_state else "Unknown"
        _info(ctx, f"Task {task_id}: {percent}% ({state})")

    return TaskMonitor(redfish, task_id, timeout, progress=progress).run()


@click.group(cls=_Group)
@click.option("--host", envvar="BMC_HOST", help="BMC hostname or IP address (not needed with fleet commands)")
@click.option("--username", "-u", envvar="BMC_USERNAME", help="BMC username")
@click.option("--password", "-p", envvar="BMC_PASSWORD", help="BMC password")
@click.option("--port", default=DEFAULT_PORT, type=int, envvar="BMC_PORT", help="BMC HTTPS port (default: 443)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format",
)
@click.option("--verify-ssl/--no-verify-ssl", default=True, help="Verify SSL certificates (default: yes)")
@click.option("--timeout", default=DEFAULT_TIMEOUT, type=float, help="Per-request timeout in seconds")
@click.option("--jumphost", envvar="BMC_JUMPHOST", help="SSH jumphost to tunnel through (optional)")
@click.option("--jumphost-user", envvar="BMC_JUMPHOST_USER", help="SSH username for jumphost (defaults to current user)")
@click.option(
    "--ssh-key",
    envvar="BMC_JUMPHOST_SSH_KEY",
    help="Path to SSH private key for jumphost (optional, uses SSH agent/default keys if not specified)",
)
@click.option(
    "--ssh-password",
    envvar="BMC_JUMPHOST_SSH_PASSWORD",
    help="SSH password for jumphost (only needed if not using SSH keys)",
)
@click.option("--no-tunnel", is_flag=True, help="Disable SSH tunnel (for direct BMC access)")
@click.option("--standard", is_flag=True, help="Skip vendor detection and speak plain Redfish")
@click.option("--verbose", "-v", is_flag=True, help="Log every request to stderr")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress messages (errors and results still shown)")
@click.version_option(package_name="bmc-redfish")
@click.pass_context
def main(
    ctx: click.Context,
    host: Optional[str],
    username: Optional[str],
    password: Optional[str],
    port: int,
    output_format: str,
    verify_ssl: bool,
    timeout: float,
    jumphost: Optional[str],
    jumphost_user: Optional[str],
    ssh_key: Optional[str],
    ssh_password: Optional[str],
    no_tunnel: bool,
    standard: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Manage servers through their BMC's Redfish API."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    ctx.obj = {
        "host": host,
        "username": username,
        "password": password,
        "port": port,
        "output_format": output_format.lower(),
        "verify_ssl": verify_ssl,
        "timeout": timeout,
        "jumphost": jumphost,
        "jumphost_user": jumphost_user,
        "ssh_key": ssh_key,
        "ssh_password": ssh_password,
        "no_tunnel": no_tunnel,
        "standard": standard,
        "quiet": quiet,
        "redfish": None,
    }


@main.command("power-state")
@click.pass_context
def power_state(ctx: click.Context) -> None:
    """Show whether the host is on or off."""
    state = _connect(ctx).get_power_state()
    _emit(ctx, {"power_state": state}, state.value if state else "Unknown")


@main.command()
@click.argument("action", type=_enum_choice(SystemPowerControl))
@click.pass_context
def power(ctx: click.Context, action: str) -> None:
    """Reset, power on or power off the host."""
    control = SystemPowerControl(action)
    _connect(ctx).power(control)
    _emit(ctx, {"action": control}, f"{control.value} requested")


@main.command("power-metrics")
@click.pass_context
def power_metrics(ctx: click.Context) -> None:
    """Show power consumption, supplies and voltages."""
    metrics = _connect(ctx).get_power_metrics()
    _emit(ctx, metrics, format_power_output(metrics))


@main.command("thermal-metrics")
@click.pass_context
def thermal_metrics(ctx: click.Context) -> None:
    """Show temperatures, fans and leak detectors."""
    metrics = _connect(ctx).get_thermal_metrics()
    _emit(ctx, metrics, format_thermal_output(metrics))


@main.command("boot-once")
@click.argument("target", type=_enum_choice(Boot))
@click.pass_context
def boot_once(ctx: click.Context, target: str) -> None:
    """Boot from TARGET on the next boot only."""
    _connect(ctx).boot_once(Boot(target))
    _emit(ctx, {"boot_once": Boot(target)}, f"Next boot: {target}")


@main.command("boot-first")
@click.argument("target", type=_enum_choice(Boot))
@click.pass_context
def boot_first(ctx: click.Context, target: str) -> None:
    """Put TARGET first in the persistent boot order."""
    _connect(ctx).boot_first(Boot(target))
    _emit(ctx, {"boot_first": Boot(target)}, f"First boot option: {target}")


@main.command()
@click.argument("state", type=click.Choice(["enable", "disable"], case_sensitive=False))
@click.pass_context
def lockdown(ctx: click.Context, state: str) -> None:
    """Enable or disable BMC and host lockdown."""
    target = EnabledDisabled.Enabled if state.lower() == "enable" else EnabledDisabled.Disabled
    _connect(ctx).lockdown(target)
    _emit(ctx, {"lockdown": target}, f"Lockdown {target.value.lower()}")


@main.command("lockdown-status")
@click.pass_context
def lockdown_status(ctx: click.Context) -> None:
    """Show whether lockdown is enabled, disabled or partial."""
    status = _connect(ctx).lockdown_status()
    _emit(ctx, status, str(status))


@main.command("machine-setup-status")
@click.option("--mac", "boot_interface_mac", help="MAC of the DPU interface that should boot first")
@click.pass_context
def machine_setup_status(ctx: click.Context, boot_interface_mac: Optional[str]) -> None:
    """List the settings that still differ from the expected machine setup."""
    status = _connect(ctx).machine_setup_status(boot_interface_mac)
    if status.is_done:
        text = "Machine setup is complete"
    else:
        text = "\n".join(f"{d.key}: expected {d.expected}, actual {d.actual}" for d in status.diffs)
    _emit(ctx, {"is_done": status.is_done, "diffs": status.diffs}, text)


@main.command()
@click.pass_context
def firmware(ctx: click.Context) -> None:
    """List installed firmware versions."""
    redfish = _connect(ctx)
    inventories = [redfish.get_firmware(fw_id) for fw_id in redfish.get_software_inventories()]
    _emit(ctx, inventories, format_firmware_output(inventories))


@main.command("update-firmware")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--reboot", is_flag=True, help="Apply immediately instead of on the next reset")
@click.option(
    "--component-type",
    type=_enum_choice(ComponentType),
    default=ComponentType.Unknown.value,
    help="Firmware component the image is for",
)
@click.option("--wait", is_flag=True, help="Wait for the update task to finish")
@click.option("--upload-timeout", default="30m", metavar="DURATION", help="Upload timeout (default: 30m)")
@click.option("--wait-timeout", default="1h", metavar="DURATION", help="How long --wait waits (default: 1h)")
@click.pass_context
def update_firmware(
    ctx: click.Context,
    file: str,
    reboot: bool,
    component_type: str,
    wait: bool,
    upload_timeout: str,
    wait_timeout: str,
) -> None:
    """Upload FILE through the multipart update service."""
    redfish = _connect(ctx)
    _info(ctx, f"Uploading {file}...")
    task_id = redfish.update_firmware_multipart(file, reboot, parse_duration(upload_timeout), ComponentType(component_type))
    if not wait:
        _emit(ctx, {"task_id": task_id}, f"Update task: {task_id}")
        return
    task = _wait(ctx, redfish, task_id, parse_duration(wait_timeout))
    _emit(ctx, task, f"Update task {task.id}: {task.task_state.value if task.task_state else 'Unknown'}")


@main.command()
@click.argument("task_id")
@click.option("--wait", is_flag=True, help="Poll until the task finishes")
@click.option("--timeout", "wait_timeout", default="1h", metavar="DURATION", help="How long --wait waits (default: 1h)")
@click.pass_context
def task(ctx: click.Context, task_id: str, wait: bool, wait_timeout: str) -> None:
    """Show the state of task TASK_ID."""
    redfish = _connect(ctx)
    result = _wait(ctx, redfish, task_id, parse_duration(wait_timeout)) if wait else redfish.get_task(task_id)
    state = result.task_state.value if result.task_state else "Unknown"
    percent = f" {result.percent_complete}%" if result.percent_complete is not None else ""
    _emit(ctx, result, f"Task {result.id}: {state}{percent}")


@main.command()
@click.pass_context
def bios(ctx: click.Context) -> None:
    """Show current BIOS attributes."""
    attributes = _connect(ctx).bios()
    _emit(ctx, attributes, _format_attributes(attributes))


@main.command()
@click.pass_context
def pending(ctx: click.Context) -> None:
    """Show BIOS changes that apply on the next reboot."""
    attributes = _connect(ctx).pending()
    _emit(ctx, attributes, _format_attributes(attributes))


@main.command("fleet-power-state")
@click.option(
    "--servers-file",
    required=True,
    type=click.Path(exists=True),
    metavar="CSV_FILE",
    help="CSV file with server list (columns: ip,username,password,name)",
)
@click.option("--max-workers", type=int, default=5, help="Max parallel connections (default: 5)")
@click.pass_context
def fleet_power_state(ctx: click.Context, servers_file: str, max_workers: int) -> None:
    """Show the power state of every server in CSV_FILE."""
    opts = ctx.obj
    servers = load_servers_from_csv(servers_file)
    with RedfishClientPool() as pool:
        results = run_on_servers(
            servers,
            lambda redfish: redfish.get_power_state(),
            pool,
            jumphost=opts["jumphost"] if not opts["no_tunnel"] else None,
            jumphost_user=opts["jumphost_user"],
            ssh_key=opts["ssh_key"],
            ssh_password=opts["ssh_password"],
            verify_tls=opts["verify_ssl"],
            max_workers=max_workers,
            quiet=opts["quiet"],
        )
    click.echo(format_multi_server_output(results, opts["output_format"]))
    if any(not r["success"] for r in results):
        ctx.exit(1)


if __name__ == "__main__":
    main()
