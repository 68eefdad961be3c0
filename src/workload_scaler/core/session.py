#!/usr/bin/env python3
"""
Kubernetes API session shared by every workload component
"""

import asyncio
import concurrent.futures
import functools
from typing import Any, Optional

import urllib3
from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.rest import ApiException

from ..config import Settings, KubernetesSettings, settings as default_settings
from .exceptions import TransportError
from .logging_config import get_logger
from .metrics import track_request

logger = get_logger(__name__)

APPS_API = "apps"
CORE_API = "core"


def load_configuration(kube_settings: KubernetesSettings) -> client.Configuration:
    """
    Build a client configuration from in-cluster credentials or a kubeconfig file

    Args:
        kube_settings: Kubernetes section of the settings

    Returns:
        A configuration object private to the caller (the client's global default is untouched)
    """
    configuration = client.Configuration()

    if kube_settings.in_cluster:
        logger.info("Loading in-cluster config")
        k8s_config.load_incluster_config(client_configuration=configuration)
    else:
        logger.info(f"Loading kubeconfig from: {kube_settings.kubeconfig_path or 'default location'}")
        k8s_config.load_kube_config(
            config_file=kube_settings.kubeconfig_path,
            context=kube_settings.context,
            client_configuration=configuration
        )

        # Override the server host if specified in config
        server_host = kube_settings.server_host
        if server_host and configuration.host and (
            '127.0.0.1' in configuration.host or 'localhost' in configuration.host
        ):
            port = configuration.host.split(':')[-1]
            configuration.host = f"https://{server_host}:{port}"
            logger.info(f"Overriding Kubernetes API server to: {configuration.host}")

    return configuration


class KubeSession:
    """
    Read-only client configuration plus the thread pool blocking calls run on.

    A session is built once per process and handed to every catalog and handle.
    Each request opens its own ApiClient from the shared configuration, so any
    number of coroutines may use one session concurrently.
    """

    def __init__(
        self,
        configuration: client.Configuration,
        settings: Optional[Settings] = None,
        executor: Optional[concurrent.futures.Executor] = None
    ):
        """
        Initialize the session

        Args:
            configuration: Authenticated client configuration
            settings: Settings to read timeouts and annotation names from
            executor: Executor for blocking client calls; one is created when omitted
        """
        self.configuration = configuration
        self.settings = settings or default_settings

        self._owns_executor = executor is None
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=self.settings.workloads.max_workers,
            thread_name_prefix="kube-session"
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "KubeSession":
        """Create a session from in-cluster or kubeconfig credentials"""
        settings = settings or default_settings
        try:
            configuration = load_configuration(settings.kubernetes)
        except Exception as e:
            logger.error(f"Failed to initialize Kubernetes client: {e}", exc_info=True)
            raise
        logger.info(f"Kubernetes session initialized for {configuration.host}")
        return cls(configuration, settings)

    @property
    def annotation_key(self) -> str:
        return self.settings.last_modified_annotation

    @property
    def request_timeout(self) -> float:
        return self.settings.workloads.request_timeout

    @property
    def default_namespace(self) -> str:
        return self.settings.workloads.default_namespace

    def _build_api(self, api_group: str, api_client: client.ApiClient):
        if api_group == APPS_API:
            return client.AppsV1Api(api_client)
        if api_group == CORE_API:
            return client.CoreV1Api(api_client)
        raise ValueError(f"Unknown API group: {api_group}")

    def _call_sync(self, api_group: str, method: str, args: tuple, kwargs: dict) -> Any:
        with client.ApiClient(self.configuration) as api_client:
            api = self._build_api(api_group, api_client)
            return getattr(api, method)(*args, **kwargs)

    async def request(
        self,
        kind: str,
        verb: str,
        api_group: str,
        method: str,
        *args,
        request_timeout: Optional[float] = None,
        **kwargs
    ) -> Any:
        """
        Issue one API request without blocking the event loop

        Args:
            kind: Resource kind, used in errors and metrics
            verb: API verb, used in errors and metrics
            api_group: APPS_API or CORE_API
            method: Name of the client method to call
            request_timeout: Seconds before the request is abandoned; defaults to settings
            *args, **kwargs: Passed through to the client method

        Returns:
            The client method's return value

        Raises:
            TransportError: On any network, authorization or API server failure
        """
        timeout = request_timeout if request_timeout is not None else self.request_timeout
        kwargs["_request_timeout"] = timeout
        operation = f"{verb} {kind}"

        logger.debug(f"Kubernetes API request: {operation} {args} {kwargs}")
        loop = asyncio.get_running_loop()
        with track_request(kind, verb, enabled=self.settings.metrics.enabled):
            try:
                return await loop.run_in_executor(
                    self._executor,
                    functools.partial(self._call_sync, api_group, method, args, kwargs)
                )
            except ApiException as e:
                logger.error(f"Kubernetes API error during {operation}: {e.status} {e.reason}")
                raise TransportError(operation, str(e.reason), status=e.status) from e
            except (urllib3.exceptions.HTTPError, OSError) as e:
                logger.error(f"Kubernetes API unreachable during {operation}: {e}")
                raise TransportError(operation, str(e)) from e

    def close(self) -> None:
        """Shut down the thread pool if this session created it"""
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    async def __aenter__(self) -> "KubeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
