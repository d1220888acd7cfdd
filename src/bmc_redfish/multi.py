"""Running one operation across a fleet of BMCs."""

import concurrent.futures
import csv
import dataclasses
import json
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click
from pydantic import BaseModel

from .client import DEFAULT_PORT, Endpoint, RedfishClientPool
from .common import Status
from .errors import RedfishError
from .redfish import Redfish
from .tunnel import SSHTunnel

Operation = Callable[[Redfish], Any]


def load_servers_from_csv(csv_file: str) -> List[Dict[str, Any]]:
    """
    Load BMC credentials from CSV file.

    Args:
        csv_file: Path to CSV file with columns: ip,username,password
                  Optional columns: name, port, jumphost, jumphost_user,
                                   jumphost_ssh_key, jumphost_ssh_password

    Returns:
        List of server dictionaries

    Example CSV:
        ip,username,password,name,jumphost,jumphost_user
        192.0.2.10,root,pass1,server1,jump1.example.com,admin
        192.0.2.11,root,pass2,server2,,
    """
    servers = []
    csv_path = Path(csv_file)

    if not csv_path.exists():
        raise FileNotFoundError(f"Server file not found: {csv_file}")

    with open(csv_path, "r", newline="") as f:
        reader = csv.DictReader(f)

        required = {"ip", "username", "password"}
        fieldnames = reader.fieldnames or []
        if not required.issubset(fieldnames):
            raise ValueError(
                f"CSV must contain columns: {', '.join(sorted(required))}\n"
                f"Found: {', '.join(fieldnames)}"
            )

        for row in reader:
            ip = row["ip"].strip()
            servers.append(
                {
                    "ip": ip,
                    "username": row["username"].strip(),
                    "password": row["password"].strip(),
                    "name": (row.get("name") or "").strip() or ip,
                    "port": int(row["port"]) if (row.get("port") or "").strip() else DEFAULT_PORT,
                    # Per-server jumphost, overrides the global one
                    "jumphost": (row.get("jumphost") or "").strip() or None,
                    "jumphost_user": (row.get("jumphost_user") or "").strip() or None,
                    "jumphost_ssh_key": (row.get("jumphost_ssh_key") or "").strip() or None,
                    "jumphost_ssh_password": (row.get("jumphost_ssh_password") or "").strip() or None,
                }
            )

    return servers


def run_on_server(
    server: Dict[str, Any],
    operation: Operation,
    pool: RedfishClientPool,
    jumphost: Optional[str] = None,
    jumphost_user: Optional[str] = None,
    ssh_key: Optional[str] = None,
    ssh_password: Optional[str] = None,
    verify_tls: bool = True,
    quiet: bool = False,
) -> Dict[str, Any]:
    """
    Run ``operation`` against one server and capture the outcome.

    Args:
        server: Server configuration from load_servers_from_csv
        operation: Called with the server's facade; its return value is kept
        pool: Client pool shared by every server
        jumphost: Global SSH jumphost (overridden by server-specific config)
        jumphost_user: Global SSH username (overridden by server-specific config)
        ssh_key: Global SSH key path (overridden by server-specific config)
        ssh_password: Global SSH password (overridden by server-specific config)
        verify_tls: Verify BMC certificates
        quiet: Suppress progress messages

    Returns:
        Dictionary with the server name and either the result or the error
    """
    result: Dict[str, Any] = {
        "name": server["name"],
        "ip": server["ip"],
        "success": False,
        "error": None,
        "result": None,
    }

    endpoint = Endpoint(
        host=server["ip"],
        port=server["port"],
        user=server["username"],
        password=server["password"],
        verify_tls=verify_tls,
    )
    tunnel = None
    server_jumphost = server.get("jumphost") or jumphost

    try:
        if server_jumphost:
            tunnel = SSHTunnel(
                jumphost=server_jumphost,
                bmc_host=server["ip"],
                bmc_port=server["port"],
                jumphost_username=server.get("jumphost_user") or jumphost_user,
                ssh_key_path=server.get("jumphost_ssh_key") or ssh_key,
                ssh_password=server.get("jumphost_ssh_password") or ssh_password,
            )
            tunnel.start()
            endpoint = tunnel.endpoint(endpoint)

        redfish = pool.create_client(endpoint)
        result["result"] = operation(redfish)
        result["success"] = True

    except RedfishError as e:
        result["error"] = str(e)
        if not quiet:
            click.echo(f"[{server['name']}] Error: {e}", err=True)

    finally:
        if tunnel:
            tunnel.stop()

    return result


def run_on_servers(
    servers: List[Dict[str, Any]],
    operation: Operation,
    pool: RedfishClientPool,
    jumphost: Optional[str] = None,
    jumphost_user: Optional[str] = None,
    ssh_key: Optional[str] = None,
    ssh_password: Optional[str] = None,
    verify_tls: bool = True,
    max_workers: int = 5,
    quiet: bool = False,
) -> List[Dict[str, Any]]:
    """
    Run ``operation`` on every server in parallel.

    Results come back in completion order, one per server.
    """
    if not quiet:
        click.echo(f"Querying {len(servers)} server(s)...\n", err=True)

    results = []

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_server = {
            executor.submit(
                run_on_server,
                server,
                operation,
                pool,
                jumphost,
                jumphost_user,
                ssh_key,
                ssh_password,
                verify_tls,
                quiet,
            ): server
            for server in servers
        }

        for future in concurrent.futures.as_completed(future_to_server):
            result = future.result()
            results.append(result)

            if not quiet:
                if result["success"]:
                    click.echo(f"[{result['name']}] ✓ Complete", err=True)
                else:
                    click.echo(f"[{result['name']}] ✗ Failed: {result['error']}", err=True)

    return results


def to_jsonable(value: Any) -> Any:
    """Convert operation results (models, enums, statuses) into plain JSON values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Status):
        return {"state": value.state.value, "message": value.message}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def format_multi_server_output(results: List[Dict[str, Any]], output_format: str = "text") -> str:
    """
    Format fleet results for display.

    Args:
        results: List of server results
        output_format: "text" or "json"

    Returns:
        Formatted output string
    """
    if output_format.lower() == "json":
        return json.dumps(to_jsonable(results), indent=2)

    lines = ["=== Multi-Server Results ===\n"]

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    lines.append(f"Total: {len(results)} | Success: {len(successful)} | Failed: {len(failed)}\n")

    if failed:
        lines.append("Failed Servers:")
        for r in failed:
            lines.append(f"  {r['name']} ({r['ip']}): {r['error']}")
        lines.append("")

    for r in sorted(successful, key=lambda r: r["name"]):
        value = r["result"]
        if isinstance(value, Enum):
            value = value.value
        lines.append(f"  {r['name']} ({r['ip']}): {value}")

    return "\n".join(lines)
