"""Configuration module for the Explorer API server."""

# Standard library imports
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Optional
from urllib.parse import quote_plus

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from explorer_api.constants import (
    DEFAULT_CREDENTIAL,
    DEFAULT_HTTP_PORT,
    SOLANA_NETWORK_URLS,
)

# Load environment variables from .env file
load_dotenv()


def get_env_var(key: str, default: Any = None, required: bool = False,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ValueError when not found
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ValueError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None:
        if required:
            raise ValueError(f"Required environment variable '{key}' not found")
        return default

    if validator is not None:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")

    return value


def bool_validator(value: str) -> bool:
    """Convert a string to boolean."""
    return value.lower() in ("true", "1", "yes", "y", "on")


def int_validator(value: str) -> int:
    """Validate and convert string to integer.

    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def url_validator(value: str) -> str:
    """Validate URL format.

    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value


def commitment_validator(value: str) -> str:
    """Validate Solana commitment level."""
    valid_commitments = ("processed", "confirmed", "finalized")
    if value.lower() not in valid_commitments:
        raise ValueError(f"Commitment must be one of: {', '.join(valid_commitments)}")
    return value.lower()


def network_validator(value: str) -> str:
    """Validate Solana network name."""
    if value.lower() not in SOLANA_NETWORK_URLS:
        raise ValueError(f"Network must be one of: {', '.join(SOLANA_NETWORK_URLS)}")
    return value.lower()


def log_level_validator(value: str) -> str:
    """Validate log level."""
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def environment_validator(value: str) -> str:
    """Validate environment name."""
    valid_environments = ("development", "testing", "staging", "production")
    if value.lower() not in valid_environments:
        raise ValueError(f"Environment must be one of: {', '.join(valid_environments)}")
    return value.lower()


def backend_validator(value: str) -> str:
    """Validate the explorer backend kind."""
    valid_backends = ("esplora", "electrum", "none")
    if value.lower() not in valid_backends:
        raise ValueError(f"Backend must be one of: {', '.join(valid_backends)}")
    return value.lower()


@dataclass
class SolanaConfig:
    """Configuration for the Solana RPC connection."""

    rpc_url: str = SOLANA_NETWORK_URLS["mainnet-beta"]
    network: str = "mainnet-beta"
    commitment: str = "confirmed"
    timeout: int = 30  # seconds


def get_solana_config() -> SolanaConfig:
    """Get Solana configuration from environment variables.

    An explicit ``SOLANA_RPC_URL`` wins; otherwise the public endpoint of
    ``SOLANA_NETWORK`` is used.
    """
    network = get_env_var("SOLANA_NETWORK", "mainnet-beta", validator=network_validator)
    return SolanaConfig(
        rpc_url=get_env_var("SOLANA_RPC_URL", SOLANA_NETWORK_URLS[network],
                            validator=url_validator),
        network=network,
        commitment=get_env_var("SOLANA_COMMITMENT", "confirmed",
                               validator=commitment_validator),
        timeout=get_env_var("SOLANA_TIMEOUT", 30, validator=int_validator),
    )


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_HTTP_PORT
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    json_logs: bool = False

    @property
    def bind_address(self) -> str:
        """Get the bind address for the server."""
        return f"{self.host}:{self.port}"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.environment not in ("development", "testing", "staging", "production"):
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")


def get_server_config() -> ServerConfig:
    """Get server configuration from environment variables."""
    return ServerConfig(
        host=get_env_var("HOST", "0.0.0.0"),
        port=get_env_var("HTTP_PORT", DEFAULT_HTTP_PORT, validator=int_validator),
        debug=get_env_var("DEBUG", False, validator=bool_validator),
        environment=get_env_var("ENVIRONMENT", "development", validator=environment_validator),
        log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
        json_logs=get_env_var("JSON_LOGS", False, validator=bool_validator),
    )


@dataclass
class CoreRpcConfig:
    """Configuration for the Bitcoin Core RPC node."""

    host: str = "127.0.0.1"
    port: int = 8332
    username: str = DEFAULT_CREDENTIAL
    password: str = DEFAULT_CREDENTIAL
    timeout: int = 10  # seconds

    @property
    def url(self) -> str:
        """Get the node's JSON-RPC URL."""
        return f"http://{self.host}:{self.port}"


def get_core_rpc_config() -> CoreRpcConfig:
    """Get Bitcoin Core RPC configuration from environment variables."""
    return CoreRpcConfig(
        host=get_env_var("CORE_RPC_HOST", "127.0.0.1"),
        port=get_env_var("CORE_RPC_PORT", 8332, validator=int_validator),
        username=get_env_var("CORE_RPC_USERNAME", DEFAULT_CREDENTIAL),
        password=get_env_var("CORE_RPC_PASSWORD", DEFAULT_CREDENTIAL),
        timeout=get_env_var("CORE_RPC_TIMEOUT", 10, validator=int_validator),
    )


@dataclass
class DatabaseConfig:
    """Configuration for the relational database."""

    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 3306
    database: str = "mempool"
    username: str = DEFAULT_CREDENTIAL
    password: str = DEFAULT_CREDENTIAL
    explicit_url: Optional[str] = None

    @property
    def url(self) -> str:
        """Get the async SQLAlchemy URL for the database."""
        if self.explicit_url:
            return self.explicit_url
        return (
            f"mysql+aiomysql://{quote_plus(self.username)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.database}"
        )


def get_database_config() -> DatabaseConfig:
    """Get database configuration from environment variables."""
    return DatabaseConfig(
        enabled=get_env_var("DATABASE_ENABLED", True, validator=bool_validator),
        host=get_env_var("DATABASE_HOST", "127.0.0.1"),
        port=get_env_var("DATABASE_PORT", 3306, validator=int_validator),
        database=get_env_var("DATABASE_DATABASE", "mempool"),
        username=get_env_var("DATABASE_USERNAME", DEFAULT_CREDENTIAL),
        password=get_env_var("DATABASE_PASSWORD", DEFAULT_CREDENTIAL),
        explicit_url=get_env_var("DATABASE_URL"),
    )


@dataclass
class RedisConfig:
    """Configuration for the Redis cache."""

    enabled: bool = False
    url: str = "redis://127.0.0.1:6379/0"


def get_redis_config() -> RedisConfig:
    """Get Redis configuration from environment variables."""
    return RedisConfig(
        enabled=get_env_var("REDIS_ENABLED", False, validator=bool_validator),
        url=get_env_var("REDIS_URL", "redis://127.0.0.1:6379/0"),
    )


@dataclass
class BackendConfig:
    """Which backend serves address and transaction lookups."""

    kind: str = "none"  # "esplora", "electrum" or "none"


@dataclass
class ElectrumConfig:
    """Configuration for the Electrum server connection."""

    host: str = "127.0.0.1"
    port: int = 50002
    tls_enabled: bool = True


@dataclass
class FiatPriceConfig:
    """Configuration for the third-party fiat price API."""

    enabled: bool = False
    api_key: str = ""


@dataclass
class AppConfig:
    """Comprehensive application configuration."""

    solana: SolanaConfig = field(default_factory=SolanaConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    core_rpc: CoreRpcConfig = field(default_factory=CoreRpcConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    electrum: ElectrumConfig = field(default_factory=ElectrumConfig)
    fiat_price: FiatPriceConfig = field(default_factory=FiatPriceConfig)


def load_app_config() -> AppConfig:
    """Build the application configuration from environment variables."""
    return AppConfig(
        solana=get_solana_config(),
        server=get_server_config(),
        core_rpc=get_core_rpc_config(),
        database=get_database_config(),
        redis=get_redis_config(),
        backend=BackendConfig(
            kind=get_env_var("MEMPOOL_BACKEND", "none", validator=backend_validator),
        ),
        electrum=ElectrumConfig(
            host=get_env_var("ELECTRUM_HOST", "127.0.0.1"),
            port=get_env_var("ELECTRUM_PORT", 50002, validator=int_validator),
            tls_enabled=get_env_var("ELECTRUM_TLS_ENABLED", True, validator=bool_validator),
        ),
        fiat_price=FiatPriceConfig(
            enabled=get_env_var("FIAT_PRICE_ENABLED", False, validator=bool_validator),
            api_key=get_env_var("FIAT_PRICE_API_KEY", ""),
        ),
    )


@lru_cache()
def get_app_config() -> AppConfig:
    """Get the process-wide application configuration.

    Built once on first use; the entry point passes it to every component.
    """
    return load_app_config()
