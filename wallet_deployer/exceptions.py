"""
Custom exceptions for the Thirdweb Wallet Deployer application.

Every error carries a ``kind`` tag so callers can branch on it explicitly
instead of probing for attributes.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Category of a WalletDeployerError."""
    NETWORK = "network"
    API = "api"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"


class WalletDeployerError(Exception):
    """Base exception for all application errors."""
    kind = ErrorKind.API

    def __init__(self, error: str, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or error)
        self.error = error
        self.message = message or error
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Return the normalized ``{error, message, status_code}`` form."""
        return {
            'error': self.error,
            'message': self.message,
            'status_code': self.status_code
        }

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.error} (status {self.status_code}): {self.message}"
        if self.message and self.message != self.error:
            return f"{self.error}: {self.message}"
        return self.error


class NetworkError(WalletDeployerError):
    """Raised when a request fails without receiving any response."""
    kind = ErrorKind.NETWORK


class APIError(WalletDeployerError):
    """Raised for non-2xx responses and unsuccessful API results."""
    kind = ErrorKind.API

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class WalletCreationError(APIError):
    """Raised when the email login flow does not produce a wallet."""
    pass


class ContractDeploymentError(APIError):
    """Raised when a contract deployment returns no result."""
    pass


class ValidationError(WalletDeployerError):
    """Raised for invalid user input."""
    kind = ErrorKind.VALIDATION


class ConfigurationError(WalletDeployerError):
    """Raised for missing or malformed configuration."""
    kind = ErrorKind.CONFIGURATION
