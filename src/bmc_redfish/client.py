"""Redfish transport: endpoints, retry policy and the pooled HTTP client."""

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple, Type

import requests
import urllib3
from pydantic import BaseModel, ValidationError
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InsecureRequestWarning

from .errors import (
    AuthenticationError,
    JsonDeserializeError,
    NotFoundError,
    RemoteError,
    TransportError,
)
from .model import REDFISH_ENDPOINT, odata_id_to_url
from .model.error import RedfishErrorBody
from .redfish import Redfish, backend_for, detect_vendor
from .standard import RedfishStandard

logger = logging.getLogger(__name__)

DEFAULT_PORT = 443
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_IN_FLIGHT = 4
SESSIONS_URL = "SessionService/Sessions"


@dataclass(frozen=True)
class Endpoint:
    """
    A BMC contact point. Endpoints are hashable and key the client pool.

    Args:
        host: BMC hostname or IP address (or localhost if tunneled)
        port: HTTPS port
        user: Account name
        password: Account password
        verify_tls: Whether to verify the BMC certificate
        timeout: Per-request timeout in seconds
        use_sessions: Exchange credentials for an X-Auth-Token on 401
        host_header: Value for the Host header when tunneling
    """

    host: str
    port: int = DEFAULT_PORT
    user: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    verify_tls: bool = True
    timeout: float = DEFAULT_TIMEOUT
    use_sessions: bool = True
    host_header: Optional[str] = None

    @property
    def base_url(self) -> str:
        return f"https://{self.host}:{self.port}/{REDFISH_ENDPOINT}"


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff.

    GET is retried on transport errors and 5xx answers; every other verb is
    retried on transport errors only.
    """

    max_retries: int = 3
    backoff_factor: float = 0.5
    max_backoff: float = 8.0
    total_timeout: float = 120.0

    def backoff(self, attempt: int) -> float:
        return min(self.max_backoff, self.backoff_factor * 2 ** (attempt - 1))


class RedfishHttpClient:
    """
    HTTP client for one BMC.

    Safe to share between threads. At most ``max_in_flight`` requests are
    outstanding at once; the session token is replaced under a lock held
    only across the token exchange.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        retry: Optional[RetryPolicy] = None,
        max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.endpoint = endpoint
        self.retry = retry or RetryPolicy()
        self._sleep = sleep
        self._clock = clock
        self._slots = threading.BoundedSemaphore(max_in_flight)
        self._token_lock = threading.Lock()
        self._token: Optional[str] = None
        self._session_url: Optional[str] = None

        self.session = requests.Session()
        self.session.verify = endpoint.verify_tls
        self.session.headers.update({"Accept": "application/json"})
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max_in_flight)
        self.session.mount("https://", adapter)

        # Set Host header to the real BMC host when tunneling
        if endpoint.host_header:
            self.session.headers.update({"Host": endpoint.host_header})

        if not endpoint.verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)

    def url(self, rel_url: str) -> str:
        """
        Build the absolute URL of a resource.

        Args:
            rel_url: Path relative to the Redfish root, or an @odata.id

        Returns:
            e.g. 'https://10.0.0.1:443/redfish/v1/Systems/1'
        """
        return f"{self.endpoint.base_url}/{odata_id_to_url(rel_url)}"

    def get(self, rel_url: str, model: Optional[Type[BaseModel]] = None) -> Tuple[int, Any]:
        """
        GET a resource.

        Args:
            rel_url: Path relative to the Redfish root
            model: Pydantic model to decode the body into; a dict if omitted

        Returns:
            Tuple of (HTTP status, decoded body)

        Raises:
            RedfishError: One of the transport error kinds
        """
        response = self._request("GET", rel_url)
        return response.status_code, self._decode(response, model)

    def post(
        self,
        rel_url: str,
        body: Any,
        model: Optional[Type[BaseModel]] = None,
    ) -> Tuple[int, Any]:
        response = self._request("POST", rel_url, json_body=_wire(body))
        return response.status_code, self._decode(response, model)

    def post_with_location(self, rel_url: str, body: Any) -> Tuple[int, Optional[str], Any]:
        """POST an action whose result is announced in the Location header."""
        response = self._request("POST", rel_url, json_body=_wire(body))
        return response.status_code, response.headers.get("Location"), self._decode(response, None)

    def patch(self, rel_url: str, body: Any) -> int:
        response = self._request("PATCH", rel_url, json_body=_wire(body))
        return response.status_code

    def delete(self, rel_url: str) -> int:
        response = self._request("DELETE", rel_url)
        return response.status_code

    def post_file(
        self,
        rel_url: str,
        open_file: BinaryIO,
        timeout: Optional[float] = None,
    ) -> Tuple[int, Optional[str], str]:
        """
        Push a firmware image as application/octet-stream.

        Returns:
            Tuple of (HTTP status, Location header, raw body)
        """

        def data() -> BinaryIO:
            open_file.seek(0)
            return open_file

        response = self._request(
            "POST",
            rel_url,
            data_factory=data,
            headers={"Content-Type": "application/octet-stream"},
            timeout=timeout,
        )
        return response.status_code, response.headers.get("Location"), response.text

    def multipart_update(
        self,
        file_path: str,
        open_file: BinaryIO,
        parameters_json: str,
        target_url: str,
        follow_redirect: bool,
        timeout: Optional[float] = None,
    ) -> Tuple[int, Optional[str], str]:
        """
        POST a firmware image to the multipart push URI.

        The form carries two parts: ``UpdateParameters`` (application/json)
        and ``UpdateFile`` (application/octet-stream).

        Args:
            file_path: Path of the image, its base name is sent as the filename
            open_file: The image opened in binary mode
            parameters_json: Serialized UpdateParameters
            target_url: UpdateService.MultipartHttpPushUri
            follow_redirect: Whether to follow 3xx answers
            timeout: Request timeout in seconds, the endpoint timeout if omitted

        Returns:
            Tuple of (HTTP status, Location header, raw body)
        """

        def files() -> Dict[str, Tuple[Optional[str], Any, str]]:
            open_file.seek(0)
            return {
                "UpdateParameters": (None, parameters_json, "application/json"),
                "UpdateFile": (os.path.basename(file_path), open_file, "application/octet-stream"),
            }

        response = self._request(
            "POST",
            target_url,
            files_factory=files,
            timeout=timeout,
            allow_redirects=follow_redirect,
        )
        return response.status_code, response.headers.get("Location"), response.text

    def close(self) -> None:
        """Delete the Redfish session, if any, and close the HTTP session."""
        if self._session_url is not None and self._token is not None:
            url = self.url(self._session_url)
            try:
                self.session.delete(
                    url, headers={"X-Auth-Token": self._token}, timeout=self.endpoint.timeout
                )
            except requests.RequestException as e:
                logger.debug("Failed to delete Redfish session %s: %s", url, e)
            self._token = None
            self._session_url = None
        self.session.close()

    def __enter__(self) -> "RedfishHttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        rel_url: str,
        json_body: Any = None,
        data_factory: Optional[Callable[[], Any]] = None,
        files_factory: Optional[Callable[[], Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        allow_redirects: bool = True,
    ) -> requests.Response:
        url = self.url(rel_url)
        deadline = self._clock() + self.retry.total_timeout
        retries = 0
        reauthenticated = False

        while True:
            try:
                response, token = self._send(
                    method,
                    url,
                    json=json_body,
                    data=data_factory() if data_factory else None,
                    files=files_factory() if files_factory else None,
                    headers=headers,
                    timeout=timeout or self.endpoint.timeout,
                    allow_redirects=allow_redirects,
                )
            except requests.RequestException as e:
                if self._can_retry(retries, deadline):
                    retries += 1
                    logger.debug("%s %s failed (%s), retry %d", method, url, e, retries)
                    self._sleep(self.retry.backoff(retries))
                    continue
                raise TransportError(url, e) from e

            if response.status_code == 401 and self.endpoint.use_sessions and not reauthenticated:
                reauthenticated = True
                logger.debug("%s %s returned HTTP 401, creating a Redfish session", method, url)
                self._reauthenticate(token)
                continue

            if method == "GET" and response.status_code >= 500 and self._can_retry(retries, deadline):
                retries += 1
                logger.debug("%s %s returned HTTP %d, retry %d", method, url, response.status_code, retries)
                self._sleep(self.retry.backoff(retries))
                continue

            return self._check(method, url, response)

    def _send(self, method: str, url: str, headers: Optional[Dict[str, str]] = None, **kwargs: Any):
        with self._slots:
            token = self._token
            request_headers = dict(headers or {})
            auth = None
            if token is not None:
                request_headers["X-Auth-Token"] = token
            elif self.endpoint.user is not None:
                auth = (self.endpoint.user, self.endpoint.password or "")
            logger.debug("%s %s", method, url)
            response = self.session.request(method, url, headers=request_headers, auth=auth, **kwargs)
            return response, token

    def _reauthenticate(self, stale_token: Optional[str]) -> None:
        with self._token_lock:
            if self._token != stale_token:
                # Another thread already replaced the token
                return
            url = self.url(SESSIONS_URL)
            body = {"UserName": self.endpoint.user, "Password": self.endpoint.password}
            try:
                with self._slots:
                    response = self.session.post(
                        url,
                        json=body,
                        auth=(self.endpoint.user or "", self.endpoint.password or ""),
                        timeout=self.endpoint.timeout,
                    )
            except requests.RequestException as e:
                raise TransportError(url, e) from e
            token = response.headers.get("X-Auth-Token")
            if response.status_code >= 400 or not token:
                raise AuthenticationError(url, response.status_code, response.text)
            self._token = token
            self._session_url = response.headers.get("Location")

    def _can_retry(self, retries: int, deadline: float) -> bool:
        return retries < self.retry.max_retries and self._clock() < deadline

    def _check(self, method: str, url: str, response: requests.Response) -> requests.Response:
        status = response.status_code
        if status in (401, 403):
            raise AuthenticationError(url, status, response.text)
        if status == 404:
            raise NotFoundError(f"{method} {url} returned HTTP 404", url=url)
        if status >= 400:
            raise RemoteError(url, status, _parse_error(response.text), body=response.text)
        return response

    def _decode(self, response: requests.Response, model: Optional[Type[BaseModel]]) -> Any:
        text = response.text
        url = response.url or ""
        if model is None:
            if not text.strip():
                return None
            try:
                return response.json()
            except ValueError as e:
                raise JsonDeserializeError(url, text, e) from e
        try:
            return model.model_validate_json(text)
        except ValidationError as e:
            raise JsonDeserializeError(url, text, e) from e


class RedfishClientPool:
    """
    One shared RedfishHttpClient per Endpoint.

    Args:
        max_in_flight: Concurrent requests allowed per endpoint
        retry: Retry policy given to every client
    """

    def __init__(
        self,
        max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
        retry: Optional[RetryPolicy] = None,
    ) -> None:
        self.max_in_flight = max_in_flight
        self.retry = retry or RetryPolicy()
        self._clients: Dict[Endpoint, RedfishHttpClient] = {}
        self._lock = threading.Lock()

    def client_for(self, endpoint: Endpoint) -> RedfishHttpClient:
        with self._lock:
            client = self._clients.get(endpoint)
            if client is None:
                client = RedfishHttpClient(endpoint, retry=self.retry, max_in_flight=self.max_in_flight)
                self._clients[endpoint] = client
            return client

    def create_standard_client(self, endpoint: Endpoint) -> Redfish:
        """A facade over the standard backend, without vendor detection."""
        return Redfish(self._standard(endpoint))

    def create_client(self, endpoint: Endpoint) -> Redfish:
        """
        Identify the BMC and return a facade over the matching backend.

        Reads the service root, the first system and the first manager.

        Raises:
            RedfishError: If the BMC cannot be identified
        """
        standard = self._standard(endpoint)
        service_root = standard.get_service_root()
        manager = standard.get_manager()
        vendor = detect_vendor(service_root, manager)
        logger.debug("%s identified as %s", endpoint.host, vendor.value)
        return Redfish(backend_for(vendor, standard))

    def close(self) -> None:
        with self._lock:
            clients: List[RedfishHttpClient] = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.close()

    def __enter__(self) -> "RedfishClientPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _standard(self, endpoint: Endpoint) -> RedfishStandard:
        standard = RedfishStandard(self.client_for(endpoint))
        systems = standard.get_systems()
        managers = standard.get_managers()
        if not systems:
            raise NotFoundError("BMC reports no ComputerSystem", url=endpoint.base_url)
        if not managers:
            raise NotFoundError("BMC reports no Manager", url=endpoint.base_url)
        standard.set_system_id(systems[0])
        standard.set_manager_id(managers[0])
        return standard


def _wire(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return body


def _parse_error(text: str) -> Optional[RedfishErrorBody]:
    try:
        return RedfishErrorBody.model_validate_json(text)
    except ValidationError:
        return None
