"""
Centralized Configuration Module

Environment switches for the STACKIT client, logging configuration, and
Kubernetes defaults. Import from here instead of reading os.environ directly.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from urllib3 import disable_warnings
from urllib3.exceptions import InsecureRequestWarning

# ============================================================================
# Environment Loading
# ============================================================================

def load_environment(env_file: Optional[str] = None):
    """
    Load environment variables from .env file.

    Args:
        env_file: Optional path to .env file. If None, uses default .env
    """
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)
            logging.getLogger(__name__).info(f"Loaded environment from: {env_file}")
        else:
            logging.getLogger(__name__).warning(f"Environment file not found: {env_file}")
    else:
        load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_timeout(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer number of seconds, got '{raw}'") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


# ============================================================================
# STACKIT Client Settings
# ============================================================================

DEFAULT_API_ENDPOINT = "https://iaas.api.stackit.cloud"
DEFAULT_TOKEN_ENDPOINT = "https://service-account.api.stackit.cloud/token"
DEFAULT_API_TIMEOUT = 30


@dataclass(frozen=True)
class StackitConfig:
    """
    Process-wide settings consumed at client construction.

    Attributes:
        no_auth: Skip authentication entirely (STACKIT_NO_AUTH=true)
        api_endpoint: Custom IaaS endpoint, empty for the default
        token_endpoint: Service-account token endpoint
        request_timeout: Per-request timeout in seconds
        verify_tls: Verify TLS certificates of the endpoint
    """
    no_auth: bool = False
    api_endpoint: str = ""
    token_endpoint: str = DEFAULT_TOKEN_ENDPOINT
    request_timeout: int = DEFAULT_API_TIMEOUT
    verify_tls: bool = True

    @classmethod
    def from_env(cls) -> 'StackitConfig':
        """Read the current process environment (not cached)."""
        return cls(
            no_auth=_env_flag("STACKIT_NO_AUTH"),
            api_endpoint=os.getenv("STACKIT_API_ENDPOINT", ""),
            token_endpoint=os.getenv("STACKIT_TOKEN_ENDPOINT") or DEFAULT_TOKEN_ENDPOINT,
            request_timeout=_env_timeout("STACKIT_API_TIMEOUT", DEFAULT_API_TIMEOUT),
            verify_tls=not _env_flag("STACKIT_INSECURE_SKIP_VERIFY"),
        )

    @property
    def endpoint(self) -> str:
        """Effective IaaS endpoint (custom override or default)."""
        return (self.api_endpoint or DEFAULT_API_ENDPOINT).rstrip("/")


class KubernetesConfig:
    """Defaults for reading machine credentials from a Kubernetes Secret"""

    NAMESPACE = os.getenv("K8S_NAMESPACE", "default")
    SECRET_NAME = os.getenv("K8S_SECRET_NAME", "")
    KUBECONFIG = os.getenv("KUBECONFIG", "")
    TIMEOUT = int(os.getenv("K8S_TIMEOUT", "30"))


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Logging configuration"""

    # Log Level
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Log Format
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # Detailed format with file/line
    DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

    # File Logging
    LOG_FILE = os.getenv("LOG_FILE")  # Optional
    LOG_FILE_MAX_BYTES = int(os.getenv("LOG_FILE_MAX_BYTES", "10485760"))  # 10MB
    LOG_FILE_BACKUP_COUNT = int(os.getenv("LOG_FILE_BACKUP_COUNT", "5"))


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """
    Configure application logging.

    Args:
        verbose: Enable verbose (DEBUG) logging
        log_file: Optional log file path
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, LogConfig.LOG_LEVEL, logging.INFO)

    log_format = LogConfig.DETAILED_FORMAT if verbose else LogConfig.LOG_FORMAT

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=LogConfig.LOG_DATE_FORMAT
    )

    if log_file or LogConfig.LOG_FILE:
        from logging.handlers import RotatingFileHandler

        file_path = log_file or LogConfig.LOG_FILE
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=LogConfig.LOG_FILE_MAX_BYTES,
            backupCount=LogConfig.LOG_FILE_BACKUP_COUNT
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(log_format, LogConfig.LOG_DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Logging to file: {file_path}")

    # Suppress noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("kubernetes").setLevel(logging.WARNING)

    logger.info(f"Logging configured: level={logging.getLevelName(log_level)}")


def configure_tls_warnings(config: StackitConfig):
    """Silence urllib3's insecure-request warning when verification is off."""
    if not config.verify_tls:
        disable_warnings(InsecureRequestWarning)


logger = logging.getLogger(__name__)

# Load environment on module import
load_environment()

__all__ = [
    'StackitConfig',
    'KubernetesConfig',
    'LogConfig',
    'DEFAULT_API_ENDPOINT',
    'DEFAULT_TOKEN_ENDPOINT',
    'load_environment',
    'setup_logging',
    'configure_tls_warnings',
]
