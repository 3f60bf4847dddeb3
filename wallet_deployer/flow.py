import logging
from typing import Optional, Tuple
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .client import ThirdwebClient
from .config import DEFAULT_DECIMALS, MAX_DECIMALS, DEFAULT_INITIAL_SUPPLY, OUTPUT_DIR
from .exceptions import ValidationError
from .models import WalletInfo, TokenMetadata, ContractInfo
from .prompts import ConsolePrompter
from .utils import is_valid_email, to_checksum_address, build_output_filename, save_json_file

logger = logging.getLogger("wallet_deployer.flow")


def parse_decimals(value: str) -> Tuple[int, bool]:
    """
    Parse a decimals answer.

    Returns:
        tuple: (decimals, is_valid). An empty answer gives the default.
        Non-numeric or out of range answers give the default with
        is_valid False.
    """
    if not value:
        return DEFAULT_DECIMALS, True
    try:
        decimals = int(value)
    except ValueError:
        return DEFAULT_DECIMALS, False
    if decimals < 0 or decimals > MAX_DECIMALS:
        return DEFAULT_DECIMALS, False
    return decimals, True


class WalletDeployFlow:
    def __init__(self, client: ThirdwebClient, prompter: ConsolePrompter,
                 console: Optional[Console] = None, output_dir: str = OUTPUT_DIR):
        self.client = client
        self.prompter = prompter
        self.console = console or prompter.console
        self.output_dir = output_dir

    def run_interactive(self):
        """Prompt for everything, create the wallet and optionally deploy a token."""
        self.console.print(Panel.fit("Thirdweb Wallet Creator & ERC-20 Deployer", style="bold magenta"))

        ecosystem_id, ecosystem_partner_id = self.prompt_ecosystem()
        email = self.prompt_email()

        self.console.print(f"\n[cyan]Creating wallet for: {escape(email)}[/cyan]")
        wallet = self.create_wallet(email, ecosystem_id, ecosystem_partner_id)
        self.display_wallet_info(wallet)

        if self.prompter.confirm("Would you like to deploy an ERC-20 token contract?"):
            contract = self.deploy_token(wallet)
            self.display_contract_info(contract)
            if self.prompter.confirm("Save wallet and contract information to file?"):
                self.save_deployment_info(wallet, contract)
        elif self.prompter.confirm("Save wallet information to file?"):
            self.save_wallet_info(wallet)

    def run_non_interactive(self, email: str, ecosystem_id: Optional[str] = None,
                            ecosystem_partner_id: Optional[str] = None):
        """Use the given email; the OTP and token fields are still prompted for."""
        if not is_valid_email(email):
            raise ValidationError("Invalid email format provided", f"'{email}' is not a valid email address")

        self.console.print(f"[cyan]Creating wallet for: {escape(email)}[/cyan]")
        wallet = self.create_wallet(email, ecosystem_id, ecosystem_partner_id)
        self.console.print(f"[green]Wallet created: {escape(to_checksum_address(wallet.address))}[/green]")
        self.console.print(f"New User: {'Yes' if wallet.is_new_user else 'No'}")
        if wallet.ecosystem_id:
            self.console.print(f"Ecosystem ID: {escape(wallet.ecosystem_id)}")

        if self.prompter.confirm("Deploy ERC-20 contract?"):
            contract = self.deploy_token(wallet)
            self.console.print(f"[green]Contract deployed: {escape(contract.contract_address)}[/green]")
            if contract.transaction_id:
                self.console.print(f"Transaction ID: {escape(contract.transaction_id)}")

    def prompt_ecosystem(self) -> Tuple[Optional[str], Optional[str]]:
        config = self.client.config
        if config.ecosystem_id:
            self.console.print(f"[cyan]Using ecosystem: {escape(config.ecosystem_id)}[/cyan]")
            return config.ecosystem_id, config.ecosystem_partner_id

        if not self.prompter.confirm("Create the wallet in an ecosystem?"):
            return None, None

        ecosystem_id = self.prompter.ask("Enter ecosystem ID")
        if not ecosystem_id:
            raise ValidationError("Ecosystem ID is required", "An ecosystem ID is required when using an ecosystem wallet")
        ecosystem_partner_id = self.prompter.ask("Enter ecosystem partner ID (optional)") or None
        return ecosystem_id, ecosystem_partner_id

    def prompt_email(self) -> str:
        email = self.prompter.ask("Enter email address for wallet creation")
        if not is_valid_email(email):
            raise ValidationError("Invalid email format", f"'{email}' is not a valid email address")
        return email

    def _get_otp_code(self) -> str:
        self.console.print("[green]Login code sent successfully. Please check your email.[/green]")
        return self.prompter.ask_otp()

    def create_wallet(self, email: str, ecosystem_id: Optional[str] = None,
                      ecosystem_partner_id: Optional[str] = None) -> WalletInfo:
        self.console.print("[yellow]Sending login code...[/yellow]")
        wallet = self.client.create_wallet_with_email(
            email,
            self._get_otp_code,
            ecosystem_id,
            ecosystem_partner_id
        )
        logger.info(f"Wallet ready for {email}: {wallet.address}")
        return wallet

    def _ask_required(self, message: str, field: str) -> str:
        while True:
            answer = self.prompter.ask(message)
            if answer:
                return answer
            self.console.print(f"[red]Token {field} is required.[/red]")

    def prompt_token_metadata(self) -> TokenMetadata:
        """Prompt for the token fields; decimals fall back to the default on bad input."""
        self.console.print("\n[bold]Token Configuration[/bold]")

        name = self._ask_required('Enter token name (e.g., "My Token")', "name")
        symbol = self._ask_required('Enter token symbol (e.g., "MTK")', "symbol")
        description = self._ask_required("Enter token description", "description")

        decimals, valid = parse_decimals(self.prompter.ask("Enter token decimals", default=str(DEFAULT_DECIMALS)))
        if not valid:
            self.console.print(f"[yellow]Invalid decimals. Using default value of {DEFAULT_DECIMALS}.[/yellow]")

        initial_supply = self.prompter.ask("Enter initial supply", default=DEFAULT_INITIAL_SUPPLY)

        return TokenMetadata(
            name=name,
            symbol=symbol,
            description=description,
            decimals=decimals,
            initial_supply=initial_supply
        )

    def deploy_token(self, wallet: WalletInfo) -> ContractInfo:
        metadata = self.prompt_token_metadata()
        self.console.print(f"\n[yellow]Deploying {escape(metadata.name)} ({escape(metadata.symbol)})...[/yellow]")
        return self.client.deploy_erc20_contract(wallet.address, metadata, wallet.chain_id)

    def display_wallet_info(self, wallet: WalletInfo):
        lines = [
            "[green]Wallet created successfully![/green]",
            f"Email: {escape(wallet.email)}",
            f"Wallet Address: {escape(to_checksum_address(wallet.address))}",
            f"New User: {'Yes' if wallet.is_new_user else 'No'}",
            f"Created At: {escape(str(wallet.created_at))}"
        ]
        if wallet.chain_id:
            lines.append(f"Chain ID: {wallet.chain_id}")
        if wallet.ecosystem_id:
            lines.append(f"Ecosystem ID: {escape(wallet.ecosystem_id)}")
        if wallet.ecosystem_partner_id:
            lines.append(f"Ecosystem Partner ID: {escape(wallet.ecosystem_partner_id)}")
        self.console.print(Panel.fit("\n".join(lines)))

    def display_contract_info(self, contract: ContractInfo):
        lines = [
            "[green]ERC-20 Contract deployed successfully![/green]",
            f"Token Name: {escape(contract.token_name)}",
            f"Token Symbol: {escape(contract.token_symbol)}",
            f"Description: {escape(contract.token_description)}",
            f"Contract Address: {escape(to_checksum_address(contract.contract_address))}"
        ]
        if contract.transaction_id:
            lines.append(f"Transaction ID: {escape(contract.transaction_id)}")
        lines.extend([
            f"Chain ID: {contract.chain_id}",
            f"Deployer: {escape(to_checksum_address(contract.deployer))}",
            f"Deployed At: {contract.deployed_at}"
        ])
        self.console.print(Panel.fit("\n".join(lines)))

    def save_wallet_info(self, wallet: WalletInfo) -> Optional[str]:
        filename = build_output_filename("wallet", wallet.address)
        try:
            path = save_json_file(wallet.to_dict(), filename, self.output_dir)
        except OSError as e:
            logger.info(f"Error saving wallet info: {str(e)}")
            self.console.print(f"[red]Error saving wallet info: {escape(str(e))}[/red]")
            return None
        self.console.print(f"[green]Wallet information saved to: {escape(path)}[/green]")
        return path

    def save_deployment_info(self, wallet: WalletInfo, contract: ContractInfo) -> Optional[str]:
        filename = build_output_filename("deployment", contract.contract_address)
        data = {
            'wallet': wallet.to_dict(),
            'contract': contract.to_dict()
        }
        try:
            path = save_json_file(data, filename, self.output_dir)
        except OSError as e:
            logger.info(f"Error saving deployment info: {str(e)}")
            self.console.print(f"[red]Error saving deployment info: {escape(str(e))}[/red]")
            return None
        self.console.print(f"[green]Complete deployment information saved to: {escape(path)}[/green]")
        return path
