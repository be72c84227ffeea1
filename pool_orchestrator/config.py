"""
Configuration management for the pool orchestrator

Loads settings from environment variables and .env file.
Includes logging configuration with file output and correlation ID support.
"""

import os
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, List, Dict

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from the working directory or the project root"""
    for candidate in (Path.cwd() / ".env", Path(__file__).parent.parent / ".env"):
        if candidate.exists():
            load_dotenv(candidate)
            return


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_optional_int(key: str) -> Optional[int]:
    """Get environment variable as int, None when unset or empty"""
    value = os.getenv(key)
    if not value:
        return None
    return _get_env_int(key, 0)


def _get_env_decimal(key: str, default: str) -> Decimal:
    """Get environment variable as an exact Decimal"""
    value = os.getenv(key)
    if value is None:
        return Decimal(default)
    try:
        return Decimal(value)
    except InvalidOperation:
        logging.getLogger(__name__).warning(
            f"Invalid decimal value for {key}='{value}', using default={default}"
        )
        return Decimal(default)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class RpcConfig:
    """EVM RPC configuration"""
    url: str = field(default_factory=lambda: _get_env("EVM_RPC_URL", "http://127.0.0.1:8545"))
    # Detected from the node when unset
    chain_id: Optional[int] = field(default_factory=lambda: _get_env_optional_int("EVM_CHAIN_ID"))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))


@dataclass
class SignerConfig:
    """Signer configuration for local key signing"""
    private_key: str = field(default_factory=lambda: _get_env("EVM_PRIVATE_KEY", ""))
    keystore_path: str = field(default_factory=lambda: _get_env("EVM_KEYSTORE_PATH", ""))
    keystore_password: str = field(default_factory=lambda: _get_env("EVM_KEYSTORE_PASSWORD", ""))


@dataclass
class GasConfig:
    """
    Gas pricing policy

    The multiplier is applied to the live network gas price with exact
    decimal arithmetic. Limits are fixed upper bounds per operation, not
    estimates.
    """
    price_multiplier: Decimal = field(default_factory=lambda: _get_env_decimal("GAS_PRICE_MULTIPLIER", "1.2"))
    approval_limit: int = field(default_factory=lambda: _get_env_int("GAS_LIMIT_APPROVAL", 100_000))
    mint_limit: int = field(default_factory=lambda: _get_env_int("GAS_LIMIT_MINT", 1_000_000))
    swap_limit: int = field(default_factory=lambda: _get_env_int("GAS_LIMIT_SWAP", 500_000))

    @property
    def limits(self) -> Dict[str, int]:
        return {
            "approval": self.approval_limit,
            "mint": self.mint_limit,
            "swap": self.swap_limit,
        }


@dataclass
class TxConfig:
    """Transaction configuration"""
    # Deadline offset in seconds (default: 20 minutes)
    deadline_seconds: int = field(default_factory=lambda: _get_env_int("EVM_TX_DEADLINE_SECONDS", 1200))
    confirmation_timeout: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_TIMEOUT", 120.0))
    poll_latency: float = field(default_factory=lambda: _get_env_float("TX_POLL_LATENCY", 0.5))


@dataclass
class PathsConfig:
    """
    Locations of persisted deployment records

    deployments_dir holds this stage's records (periphery, positions);
    core_deployments_dir holds the records written by the core stage
    (factory, WETH9, pool).
    """
    deployments_dir: str = field(default_factory=lambda: _get_env("DEPLOYMENTS_DIR", "."))
    core_deployments_dir: str = field(default_factory=lambda: _get_env("CORE_DEPLOYMENTS_DIR", "../p-Dex"))
    periphery_file: str = field(default_factory=lambda: _get_env("PERIPHERY_FILE", "deployed-periphery.json"))
    positions_file: str = field(default_factory=lambda: _get_env("POSITIONS_FILE", "deployed-positions.json"))
    pool_file: str = field(default_factory=lambda: _get_env("POOL_FILE", "deployed-pool.json"))
    factory_file: str = field(default_factory=lambda: _get_env("FACTORY_FILE", "deployed-factory.json"))
    weth9_file: str = field(default_factory=lambda: _get_env("WETH9_FILE", "weth9-address.json"))

    @property
    def periphery_path(self) -> Path:
        return Path(self.deployments_dir) / self.periphery_file

    @property
    def positions_path(self) -> Path:
        return Path(self.deployments_dir) / self.positions_file

    @property
    def pool_path(self) -> Path:
        return Path(self.core_deployments_dir) / self.pool_file

    @property
    def factory_path(self) -> Path:
        return Path(self.core_deployments_dir) / self.factory_file

    @property
    def weth9_path(self) -> Path:
        return Path(self.core_deployments_dir) / self.weth9_file


@dataclass
class WorkflowConfig:
    """Default amounts (UI units) and range strategy for the workflows"""
    # auto | narrow | full-range
    mint_strategy: str = field(default_factory=lambda: _get_env("MINT_STRATEGY", "auto"))
    mint_base_amount: Decimal = field(default_factory=lambda: _get_env_decimal("MINT_BASE_AMOUNT", "0.01"))
    mint_full_range_amount: Decimal = field(default_factory=lambda: _get_env_decimal("MINT_FULL_RANGE_AMOUNT", "0.1"))
    swap_amount_in: Decimal = field(default_factory=lambda: _get_env_decimal("SWAP_AMOUNT_IN", "0.01"))
    swap_reverse: bool = field(default_factory=lambda: _get_env_bool("SWAP_REVERSE", True))


def _get_default_log_path() -> str:
    """Get default log file path under ./log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return str(Path.cwd() / "log" / f"pool_orchestrator_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (empty string disables file logging)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", _get_default_log_path()))

    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))

    # Available placeholders: %(correlation_id)s, %(asctime)s, %(name)s, %(levelname)s, %(message)s
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
    ))

    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))

    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Built once per process and passed into each component.

    Usage:
        from pool_orchestrator.config import Config

        config = Config.load()
        print(config.rpc.url)
        print(config.paths.periphery_path)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    gas: GasConfig = field(default_factory=GasConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    workflow: WorkflowConfig = field(default_factory=WorkflowConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load .env and build configuration from environment"""
        _load_env_file()
        return cls()


def setup_logging(
    log_config: LoggingConfig,
    logger_name: str = "pool_orchestrator",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.
    Every handler carries a filter that stamps the active correlation ID on
    each record.

    Args:
        log_config: Logging configuration
        logger_name: Name of the logger to configure (default: pool_orchestrator)

    Returns:
        Configured logger instance
    """
    from .infra.correlation import CorrelationIdFilter

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close and remove existing handlers to avoid duplicates on reload
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)
    correlation_filter = CorrelationIdFilter()

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        handlers.append(file_handler)

    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
        handler.addFilter(correlation_filter)
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
