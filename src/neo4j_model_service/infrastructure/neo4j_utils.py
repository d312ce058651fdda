import atexit
import json
import re
import threading
from typing import Callable, Optional, Union

from loguru import logger
from neo4j import Auth, Driver, GraphDatabase, TrustSystemCAs
from neo4j.exceptions import ServiceUnavailable

from ..config import (
    Neo4jSettingsModel,
    NeptuneSettingsModel,
    RuntimeSettings,
    load_runtime_settings,
)

ConnectionSettings = Union[Neo4jSettingsModel, NeptuneSettingsModel]

NEPTUNE_SERVICE_NAME = "neptune-db"
NEPTUNE_OPENCYPHER_PATH = "/opencypher"


def mask_uri(uri: str) -> str:
    """Mask sensitive parts of a URI for logging."""
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", uri)


def mask_username(username: Optional[str]) -> str:
    """Mask a username for logging."""
    if not username or len(username) <= 2:
        return "***"
    return username[:2] + "*" * (len(username) - 2)


def _pool_options(settings: ConnectionSettings) -> dict:
    return {
        "max_connection_lifetime": settings.max_connection_lifetime,
        "max_connection_pool_size": settings.max_connection_pool_size,
        "connection_acquisition_timeout": settings.connection_acquisition_timeout,
    }


def create_neo4j_driver(settings: Neo4jSettingsModel) -> Driver:
    """Create and verify a Neo4j driver.

    Basic auth is only sent when both user and password are configured.
    """
    if not settings.uri and not settings.host:
        raise ServiceUnavailable("Neo4j connection details are incomplete in settings.")

    uri = settings.connection_uri
    auth = (
        (settings.user, settings.password)
        if settings.user and settings.password
        else None
    )
    logger.info(
        f"Initializing Neo4j driver for URI: {mask_uri(uri)} "
        f"(user: {mask_username(settings.user)})"
    )
    driver = GraphDatabase.driver(uri, auth=auth, **_pool_options(settings))
    driver.verify_connectivity()
    logger.info("Neo4j driver initialized and connectivity verified.")
    return driver


def neptune_signed_credentials(host: str, port: Union[int, str], region: str) -> str:
    """Return the SigV4-signed handshake Neptune expects as the Bolt password.

    Credentials are resolved by the default boto3 chain (environment, shared
    config, instance profile).
    """
    try:
        import boto3
        from botocore.auth import SigV4Auth
        from botocore.awsrequest import AWSRequest
    except ImportError as e:
        raise ImportError(
            "boto3 package required for Neptune IAM authentication: pip install boto3"
        ) from e

    credentials = boto3.Session().get_credentials()
    if credentials is None:
        raise ServiceUnavailable("No AWS credentials available for Neptune IAM authentication.")

    request = AWSRequest(
        method="GET", url=f"https://{host}:{port}{NEPTUNE_OPENCYPHER_PATH}", data=None
    )
    request.headers.add_header("Host", f"{host}:{port}")
    SigV4Auth(credentials, NEPTUNE_SERVICE_NAME, region).add_auth(request)

    auth_info = {
        "Authorization": request.headers["Authorization"],
        "HttpMethod": request.method,
        "X-Amz-Date": request.headers["X-Amz-Date"],
        "Host": request.headers["Host"],
    }
    if request.headers.get("X-Amz-Security-Token"):
        auth_info["X-Amz-Security-Token"] = request.headers["X-Amz-Security-Token"]
    return json.dumps(auth_info)


def create_neptune_driver(settings: NeptuneSettingsModel) -> Driver:
    """Create and verify a driver for a Neptune openCypher Bolt endpoint.

    The signature is computed once, when the driver is created.
    """
    if not settings.host:
        raise ServiceUnavailable("Neptune host is missing in settings.")

    auth = Auth(
        "basic",
        "username",
        neptune_signed_credentials(settings.host, settings.port, settings.region),
        "realm",
    )
    logger.info(f"Initializing Neptune driver for bolt://{settings.host}:{settings.port}")
    driver = GraphDatabase.driver(
        f"bolt://{settings.host}:{settings.port}",
        auth=auth,
        encrypted=True,
        trusted_certificates=TrustSystemCAs(),
        **_pool_options(settings),
    )
    driver.verify_connectivity()
    logger.info("Neptune driver initialized and connectivity verified.")
    return driver


def create_driver(settings: ConnectionSettings) -> Driver:
    """Create a driver for whichever backend ``settings`` describes."""
    if isinstance(settings, NeptuneSettingsModel):
        return create_neptune_driver(settings)
    return create_neo4j_driver(settings)


class Neo4jDriverManager:
    """Thread-safe manager for a process-wide shared driver."""

    def __init__(
        self, settings_loader: Callable[[], RuntimeSettings] = load_runtime_settings
    ) -> None:
        self._settings_loader = settings_loader
        self._driver: Optional[Driver] = None
        self._lock = threading.Lock()
        atexit.register(self.cleanup)

    def get_driver(self) -> Driver:
        with self._lock:
            if self._driver is None:
                self._driver = create_driver(self._settings_loader().connection)
            return self._driver

    def cleanup(self) -> None:
        with self._lock:
            if self._driver is not None:
                logger.info("Closing Neo4j driver.")
                self._driver.close()
            else:
                logger.info("Neo4j driver is already closed or not initialized.")
            self._driver = None


driver_manager = Neo4jDriverManager()


def get_neo4j_driver() -> Driver:
    """Return the shared driver, creating it on first use."""
    try:
        return driver_manager.get_driver()
    except ServiceUnavailable:
        raise
    except Exception as e:
        logger.error(f"Unexpected error obtaining Neo4j driver: {e}")
        raise


def close_neo4j_driver() -> None:
    """Close the shared driver if it is open."""
    driver_manager.cleanup()
