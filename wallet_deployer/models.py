"""
Data models exchanged between the API client and the console flows.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import DEFAULT_DECIMALS, DEFAULT_INITIAL_SUPPLY, TOKEN_PREVIEW_LENGTH


def truncate_token(token: Optional[str]) -> Optional[str]:
    """Shorten a bearer token to a preview safe for writing to disk."""
    if not token:
        return None
    return f"{token[:TOKEN_PREVIEW_LENGTH]}..."


@dataclass
class WalletInfo:
    """Wallet returned by a successful email login."""
    address: str
    email: str
    created_at: Optional[str] = None
    chain_id: Optional[int] = None
    is_new_user: Optional[bool] = None
    token: Optional[str] = None
    ecosystem_id: Optional[str] = None
    ecosystem_partner_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize using the API's field names.

        The token is truncated to a preview; absent optional fields are
        left out.
        """
        data = {
            'address': self.address,
            'email': self.email,
            'created_at': self.created_at,
            'chain_id': self.chain_id,
            'isNewUser': self.is_new_user,
            'token': truncate_token(self.token),
            'ecosystemId': self.ecosystem_id,
            'ecosystemPartnerId': self.ecosystem_partner_id
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class TokenMetadata:
    """User-supplied settings for a new ERC-20 token."""
    name: str
    symbol: str
    description: str
    decimals: int = DEFAULT_DECIMALS
    initial_supply: str = DEFAULT_INITIAL_SUPPLY

    def __post_init__(self):
        self.symbol = self.symbol.upper()


@dataclass
class ContractInfo:
    """Result of a successful contract deployment."""
    contract_address: str
    chain_id: int
    deployer: str
    token_name: str
    token_symbol: str
    token_description: str
    deployed_at: str
    transaction_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'contractAddress': self.contract_address,
            'transactionId': self.transaction_id,
            'chainId': self.chain_id,
            'deployer': self.deployer,
            'tokenName': self.token_name,
            'tokenSymbol': self.token_symbol,
            'tokenDescription': self.token_description,
            'deployed_at': self.deployed_at
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class TransactionStatus:
    """Status of a transaction as reported by the API."""
    status: str = 'unknown'
    transaction_id: Optional[str] = None
    chain_id: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    contract_address: Optional[str] = None
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None
    gas_used: Optional[str] = None
    effective_gas_price: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == 'pending'

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'TransactionStatus':
        """Parse either a ``{"result": {...}}`` envelope or a bare object."""
        data = response.get('result') or response if response else {}
        return cls(
            status=data.get('status') or 'unknown',
            transaction_id=data.get('transactionId') or data.get('id'),
            chain_id=data.get('chainId'),
            from_address=data.get('from'),
            to_address=data.get('to'),
            contract_address=data.get('contractAddress'),
            block_number=data.get('blockNumber'),
            transaction_hash=data.get('transactionHash'),
            gas_used=data.get('gasUsed'),
            effective_gas_price=data.get('effectiveGasPrice'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            error=data.get('error')
        )
