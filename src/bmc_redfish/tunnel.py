"""SSH tunnel to a BMC behind a jumphost."""

import logging
from typing import Optional

import paramiko
from sshtunnel import BaseSSHTunnelForwarderError, SSHTunnelForwarder

from .client import DEFAULT_PORT, Endpoint
from .errors import TransportError

logger = logging.getLogger(__name__)

LOCALHOST = "127.0.0.1"


class SSHTunnel:
    """Manages an SSH tunnel to a BMC through a jumphost."""

    def __init__(
        self,
        jumphost: str,
        bmc_host: str,
        bmc_port: int = DEFAULT_PORT,
        jumphost_port: int = 22,
        jumphost_username: Optional[str] = None,
        ssh_key_path: Optional[str] = None,
        ssh_password: Optional[str] = None,
    ) -> None:
        """
        Initialize SSH tunnel configuration.

        Args:
            jumphost: Jumphost hostname (e.g., bastion.example.com)
            bmc_host: Target BMC IP or hostname, as seen from the jumphost
            bmc_port: Target BMC HTTPS port
            jumphost_port: SSH port on jumphost
            jumphost_username: SSH username for jumphost
            ssh_key_path: Path to SSH private key
            ssh_password: SSH password (if not using key)
        """
        self.jumphost = jumphost
        self.bmc_host = bmc_host
        self.bmc_port = bmc_port
        self.jumphost_port = jumphost_port
        self.jumphost_username = jumphost_username
        self.ssh_key_path = ssh_key_path
        self.ssh_password = ssh_password
        self.tunnel: Optional[SSHTunnelForwarder] = None
        self.local_bind_port: Optional[int] = None

    @property
    def target(self) -> str:
        return f"ssh://{self.jumphost}:{self.jumphost_port}/{self.bmc_host}:{self.bmc_port}"

    def start(self) -> int:
        """
        Start the SSH tunnel.

        Returns:
            Local port number where the tunnel is listening

        Raises:
            TransportError: If the tunnel cannot be established
        """
        ssh_kwargs = {}
        if self.ssh_key_path:
            ssh_kwargs["ssh_pkey"] = self.ssh_key_path
        elif self.ssh_password:
            ssh_kwargs["ssh_password"] = self.ssh_password
        # else: let paramiko use default SSH key discovery (agent + ~/.ssh/id_*)

        self.tunnel = SSHTunnelForwarder(
            ssh_address_or_host=(self.jumphost, self.jumphost_port),
            ssh_username=self.jumphost_username,
            remote_bind_address=(self.bmc_host, self.bmc_port),
            local_bind_address=(LOCALHOST, 0),  # 0 = random available port
            **ssh_kwargs,
        )

        try:
            self.tunnel.start()
        except (BaseSSHTunnelForwarderError, paramiko.SSHException, OSError) as e:
            self.tunnel = None
            raise TransportError(self.target, e) from e
        self.local_bind_port = self.tunnel.local_bind_port

        logger.debug(
            "SSH tunnel established: localhost:%s -> %s -> %s:%s",
            self.local_bind_port,
            self.jumphost,
            self.bmc_host,
            self.bmc_port,
        )

        return self.local_bind_port

    def stop(self) -> None:
        """Stop the SSH tunnel."""
        if self.tunnel:
            self.tunnel.stop()
            self.tunnel = None
            logger.debug("SSH tunnel to %s closed", self.bmc_host)

    def endpoint(self, endpoint: Endpoint) -> Endpoint:
        """
        Rewrite ``endpoint`` to go through the running tunnel.

        The Host header keeps the BMC's own name so its certificate and
        virtual hosting still match.
        """
        if self.local_bind_port is None:
            raise TransportError(self.target, RuntimeError("tunnel is not started"))
        return Endpoint(
            host=LOCALHOST,
            port=self.local_bind_port,
            user=endpoint.user,
            password=endpoint.password,
            verify_tls=endpoint.verify_tls,
            timeout=endpoint.timeout,
            use_sessions=endpoint.use_sessions,
            host_header=endpoint.host,
        )

    def __enter__(self) -> "SSHTunnel":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
