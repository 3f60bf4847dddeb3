"""
HTTP client for the thirdweb wallet and contract API.
"""
import logging
from typing import Any, Callable, Dict, Optional
import requests

from .config import ThirdwebConfig, SDK_NAME, SDK_VERSION, TOKEN_CONTRACT_URL, DEFAULT_CHAIN_ID
from .exceptions import APIError, NetworkError, WalletCreationError, ContractDeploymentError
from .models import WalletInfo, TokenMetadata, ContractInfo
from .utils import utc_timestamp, validate_address

# Configure logger
logger = logging.getLogger("wallet_deployer.client")

# Returns the one-time code once the user has it; may block on input
OtpProvider = Callable[[], str]


class ThirdwebClient:
    def __init__(self, config: ThirdwebConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update(self._default_headers())

    def _default_headers(self) -> Dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'x-secret-key': self.config.api_key,
            'x-sdk-name': SDK_NAME,
            'x-sdk-version': SDK_VERSION
        }
        if self.config.ecosystem_id:
            headers['x-ecosystem-id'] = self.config.ecosystem_id
            if self.config.ecosystem_partner_id:
                headers['x-ecosystem-partner-id'] = self.config.ecosystem_partner_id
        return headers

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.session.close()

    def set_auth_token(self, token: str):
        """Attach the bearer token to every subsequent request."""
        self.session.headers['Authorization'] = f"Bearer {token}"

    def set_ecosystem(self, ecosystem_id: Optional[str], ecosystem_partner_id: Optional[str] = None):
        """Scope subsequent requests to an ecosystem."""
        if not ecosystem_id:
            return
        self.session.headers['x-ecosystem-id'] = ecosystem_id
        if ecosystem_partner_id:
            self.session.headers['x-ecosystem-partner-id'] = ecosystem_partner_id

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None,
                 params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make a call to the API and normalize failures.

        Args:
            method (str): HTTP method
            path (str): Path under the base URL, starting with '/'
            payload (dict, optional): JSON body
            params (dict, optional): Query parameters

        Returns:
            dict: Parsed JSON response

        Raises:
            NetworkError: If no response was received
            APIError: If the API returned a non-2xx status or invalid JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                params=params,
                timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.info(f"Request error calling {method} {path}: {str(e)}")
            raise NetworkError("Network error", str(e) or "Network error")

        if not response.ok:
            body = self._safe_json(response)
            api_error = APIError(
                error=str(body.get('error') or 'API Error'),
                message=str(body.get('message') or response.reason or f"Request failed with status code {response.status_code}"),
                status_code=response.status_code
            )
            logger.info(f"API error calling {method} {path}: {api_error}")
            raise api_error

        try:
            return response.json()
        except ValueError as e:
            logger.info(f"Invalid JSON response from {method} {path}: {str(e)}")
            raise APIError("Invalid API response", str(e), response.status_code)

    @staticmethod
    def _safe_json(response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def send_login_code(self, email: str) -> Dict[str, Any]:
        """
        Send a login code to the specified email address.

        Returns:
            dict: ``{success, error?}``
        """
        logger.info(f"Sending login code to {email}")
        return self._request('POST', '/v1/wallets/login/code', {
            'email': email,
            'type': 'email'
        })

    def verify_login_code(self, email: str, code: str) -> Dict[str, Any]:
        """
        Verify the login code and create or access the wallet.

        Returns:
            dict: ``{isNewUser, token, type, walletAddress, error?}``
        """
        logger.info(f"Verifying login code for {email}")
        return self._request('POST', '/v1/wallets/login/code/verify', {
            'email': email,
            'code': code,
            'type': 'email'
        })

    def create_wallet_with_email(self, email: str, get_otp_code: OtpProvider,
                                 ecosystem_id: Optional[str] = None,
                                 ecosystem_partner_id: Optional[str] = None) -> WalletInfo:
        """
        Create or access a wallet through the email login flow.

        Sends the login code, asks get_otp_code for the code the user
        received, then verifies it. On success the returned token is used
        for all later requests made by this client.

        Args:
            email (str): Email address to log in with
            get_otp_code (callable): Returns the one-time code
            ecosystem_id (str, optional): Ecosystem to create the wallet in
            ecosystem_partner_id (str, optional): Partner id within the ecosystem

        Returns:
            WalletInfo: The created or existing wallet

        Raises:
            WalletCreationError: If the code could not be sent or no wallet came back
        """
        ecosystem_id = ecosystem_id or self.config.ecosystem_id
        ecosystem_partner_id = ecosystem_partner_id or self.config.ecosystem_partner_id
        if ecosystem_id:
            self.set_ecosystem(ecosystem_id, ecosystem_partner_id)

        logger.info(f"Starting wallet creation process for {email}")
        code_response = self.send_login_code(email)
        if not code_response.get('success'):
            raise WalletCreationError(
                "Wallet creation failed",
                f"Failed to send login code: {code_response.get('error') or 'Unknown error'}"
            )

        otp_code = get_otp_code()

        verify_response = self.verify_login_code(email, otp_code)
        wallet_address = verify_response.get('walletAddress')
        if not wallet_address:
            raise WalletCreationError(
                "Wallet creation failed",
                f"Failed to verify login code: {verify_response.get('error') or 'No wallet address returned'}"
            )

        logger.info(f"Wallet created/accessed successfully: {wallet_address}")
        token = verify_response.get('token')
        if token:
            self.set_auth_token(token)

        return WalletInfo(
            address=wallet_address,
            email=email,
            created_at=utc_timestamp(),
            chain_id=self.config.chain_id,
            is_new_user=verify_response.get('isNewUser'),
            token=token,
            ecosystem_id=ecosystem_id,
            ecosystem_partner_id=ecosystem_partner_id if ecosystem_id else None
        )

    def deploy_erc20_contract(self, wallet_address: str, token_metadata: TokenMetadata,
                              chain_id: Optional[int] = None) -> ContractInfo:
        """
        Deploy the thirdweb TokenERC20 template from wallet_address.

        Args:
            wallet_address (str): Deployer and primary sale recipient
            token_metadata (TokenMetadata): Token name, symbol and supply
            chain_id (int, optional): Target chain, defaults to the configured chain

        Returns:
            ContractInfo: The deployed contract

        Raises:
            ContractDeploymentError: If the response has no result
        """
        deploy_chain_id = chain_id or self.config.chain_id or DEFAULT_CHAIN_ID
        logger.info(f"Deploying ERC-20 contract {token_metadata.name} ({token_metadata.symbol}) on chain {deploy_chain_id}")

        constructor_params = {
            'name': token_metadata.name,
            'symbol': token_metadata.symbol,
            'primarySaleRecipient': wallet_address
        }
        if token_metadata.initial_supply and token_metadata.initial_supply != '0':
            constructor_params['initialSupply'] = token_metadata.initial_supply

        response = self._request('POST', '/v1/contracts', {
            'chainId': deploy_chain_id,
            'contractUrl': TOKEN_CONTRACT_URL,
            'from': wallet_address,
            'constructorParams': constructor_params
        })

        result = response.get('result')
        if not result:
            raise ContractDeploymentError(
                "Contract deployment failed",
                f"Failed to deploy contract: {response.get('error') or 'Unknown error'}"
            )

        logger.info(f"Contract deployed successfully at: {result.get('address')}")
        return ContractInfo(
            contract_address=result.get('address'),
            transaction_id=result.get('transactionId'),
            chain_id=deploy_chain_id,
            deployer=wallet_address,
            token_name=token_metadata.name,
            token_symbol=token_metadata.symbol,
            token_description=token_metadata.description,
            deployed_at=utc_timestamp()
        )

    def get_wallet_info(self, address: str) -> Optional[Dict[str, Any]]:
        """Look up a wallet. Returns None on any error."""
        try:
            response = self._request('GET', f"/v1/wallets/{address}")
            return response.get('result')
        except Exception as e:
            logger.warning(f"Error getting wallet info for {address}: {str(e)}")
            return None

    def get_contract_info(self, address: str, chain_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Look up a deployed contract. Returns None on any error."""
        if not validate_address(address):
            logger.warning(f"Invalid contract address: {address}")
            return None

        query_chain_id = chain_id or self.config.chain_id or DEFAULT_CHAIN_ID
        try:
            response = self._request('GET', f"/v1/contracts/{address}", params={'chainId': query_chain_id})
            return response.get('result')
        except Exception as e:
            logger.warning(f"Error getting contract info for {address}: {str(e)}")
            return None

    def get_transaction_status(self, transaction_id: str) -> Dict[str, Any]:
        """
        Fetch the raw status response for a transaction.

        Raises:
            APIError: 404 if the transaction is unknown or not indexed yet
            NetworkError: If no response was received
        """
        logger.info(f"Checking status for transaction: {transaction_id}")
        return self._request('GET', f"/v1/transactions/{transaction_id}")
