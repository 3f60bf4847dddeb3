"""
Configuration settings for the Thirdweb Wallet Deployer application.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

# Configure logger
logger = logging.getLogger("wallet_deployer.config")

DEFAULT_BASE_URL = 'https://api.thirdweb.com'
DEFAULT_CHAIN_ID = 1

# Headers identifying this client to the API
SDK_NAME = 'python-wallet-deployer'
SDK_VERSION = '1.0.0'

# Pre-built thirdweb ERC-20 template deployed by the API
TOKEN_CONTRACT_URL = 'https://thirdweb.com/thirdweb.eth/TokenERC20'

# Request and polling settings
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_WATCH_INTERVAL = 5  # seconds
DEFAULT_WATCH_MAX_ATTEMPTS = 120  # 10 minutes at the default interval

# Token defaults
DEFAULT_DECIMALS = 18
MAX_DECIMALS = 18
DEFAULT_INITIAL_SUPPLY = '0'

# Number of token characters kept when wallet info is written to disk
TOKEN_PREVIEW_LENGTH = 20

LOG_FILE = os.getenv('LOG_FILE', 'wallet_deployer.log')
OUTPUT_DIR = os.getenv('OUTPUT_DIR', '.')


@dataclass(frozen=True)
class ThirdwebConfig:
    """Settings for one process run."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    chain_id: Optional[int] = DEFAULT_CHAIN_ID
    ecosystem_id: Optional[str] = None
    ecosystem_partner_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    watch_interval: float = DEFAULT_WATCH_INTERVAL
    watch_max_attempts: int = DEFAULT_WATCH_MAX_ATTEMPTS


def _env_number(name: str, default, cast):
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(
            "Invalid configuration",
            f"{name} must be a number, got {value!r}"
        )


def _require(condition: bool, message: str):
    if not condition:
        raise ConfigurationError("Invalid configuration", message)


def load_config(ecosystem_id: Optional[str] = None,
                ecosystem_partner_id: Optional[str] = None) -> ThirdwebConfig:
    """
    Build the configuration from environment variables.

    Args:
        ecosystem_id (str, optional): Overrides THIRDWEB_ECOSYSTEM_ID
        ecosystem_partner_id (str, optional): Overrides THIRDWEB_ECOSYSTEM_PARTNER_ID

    Returns:
        ThirdwebConfig: The loaded configuration

    Raises:
        ConfigurationError: If THIRDWEB_API_KEY is missing or a numeric value
            is malformed or out of range
    """
    api_key = os.getenv('THIRDWEB_API_KEY')
    if not api_key:
        raise ConfigurationError(
            "Missing API key",
            "THIRDWEB_API_KEY is required in environment variables"
        )

    config = ThirdwebConfig(
        api_key=api_key,
        base_url=os.getenv('THIRDWEB_BASE_URL') or DEFAULT_BASE_URL,
        chain_id=_env_number('DEFAULT_CHAIN_ID', DEFAULT_CHAIN_ID, int),
        ecosystem_id=ecosystem_id or os.getenv('THIRDWEB_ECOSYSTEM_ID') or None,
        ecosystem_partner_id=ecosystem_partner_id or os.getenv('THIRDWEB_ECOSYSTEM_PARTNER_ID') or None,
        timeout=_env_number('THIRDWEB_TIMEOUT', DEFAULT_TIMEOUT, float),
        watch_interval=_env_number('WATCH_INTERVAL', DEFAULT_WATCH_INTERVAL, float),
        watch_max_attempts=_env_number('WATCH_MAX_ATTEMPTS', DEFAULT_WATCH_MAX_ATTEMPTS, int)
    )
    _require(config.timeout > 0, f"THIRDWEB_TIMEOUT must be greater than 0, got {config.timeout:g}")
    _require(config.watch_interval >= 0, f"WATCH_INTERVAL must not be negative, got {config.watch_interval:g}")
    _require(config.watch_max_attempts >= 1, f"WATCH_MAX_ATTEMPTS must be at least 1, got {config.watch_max_attempts}")
    logger.debug(f"Loaded configuration for {config.base_url} (chain {config.chain_id})")
    return config
