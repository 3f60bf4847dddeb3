"""
Thirdweb Wallet Deployer - create wallets with email login and deploy ERC-20 tokens
through the thirdweb API.
"""
# Configuration
from .config import (
    ThirdwebConfig, load_config, DEFAULT_BASE_URL, DEFAULT_CHAIN_ID,
    TOKEN_CONTRACT_URL
)

# Core components
from .models import WalletInfo, TokenMetadata, ContractInfo, TransactionStatus
from .client import ThirdwebClient, OtpProvider
from .prompts import ConsolePrompter
from .flow import WalletDeployFlow
from .transactions import TransactionChecker, WatchPolicy, WatchState, WatchResult

# Utilities
from .utils import is_valid_email, validate_address, to_checksum_address, setup_logging

# Exceptions
from .exceptions import (
    ErrorKind, WalletDeployerError, NetworkError, APIError, WalletCreationError,
    ContractDeploymentError, ValidationError, ConfigurationError
)

__version__ = '1.0.0'

__all__ = [
    # Configuration
    'ThirdwebConfig',
    'load_config',
    'DEFAULT_BASE_URL',
    'DEFAULT_CHAIN_ID',
    'TOKEN_CONTRACT_URL',

    # Core components
    'WalletInfo',
    'TokenMetadata',
    'ContractInfo',
    'TransactionStatus',
    'ThirdwebClient',
    'OtpProvider',
    'ConsolePrompter',
    'WalletDeployFlow',
    'TransactionChecker',
    'WatchPolicy',
    'WatchState',
    'WatchResult',

    # Utilities
    'is_valid_email',
    'validate_address',
    'to_checksum_address',
    'setup_logging',

    # Exceptions
    'ErrorKind',
    'WalletDeployerError',
    'NetworkError',
    'APIError',
    'WalletCreationError',
    'ContractDeploymentError',
    'ValidationError',
    'ConfigurationError'
]
