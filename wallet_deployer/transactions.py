import json
import time
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .client import ThirdwebClient
from .config import ThirdwebConfig, DEFAULT_WATCH_INTERVAL, DEFAULT_WATCH_MAX_ATTEMPTS
from .exceptions import APIError, NetworkError, ConfigurationError
from .models import TransactionStatus
from .utils import to_checksum_address

logger = logging.getLogger("wallet_deployer.transactions")

STATUS_STYLES = {
    'pending': ('⏳', 'yellow'),
    'completed': ('✅', 'green'),
    'failed': ('❌', 'red'),
    'cancelled': ('🚫', 'red')
}

NOT_FOUND_HINT = "Transaction not found. It may not exist or may not be indexed yet."
CHECK_ID_HINT = "Tip: Make sure the transaction ID is correct and the transaction exists."


class WatchState(Enum):
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class WatchPolicy:
    """Fixed-interval retry policy for watch mode."""
    interval: float = DEFAULT_WATCH_INTERVAL
    max_attempts: int = DEFAULT_WATCH_MAX_ATTEMPTS

    def __post_init__(self):
        if self.interval < 0:
            raise ConfigurationError("Invalid watch policy", f"interval must not be negative, got {self.interval:g}")
        if self.max_attempts < 1:
            raise ConfigurationError("Invalid watch policy", f"max_attempts must be at least 1, got {self.max_attempts}")

    @classmethod
    def from_config(cls, config: ThirdwebConfig) -> 'WatchPolicy':
        return cls(interval=config.watch_interval, max_attempts=config.watch_max_attempts)


@dataclass
class WatchResult:
    state: WatchState
    attempts: int
    last_status: Optional[TransactionStatus] = None


def next_watch_state(status: TransactionStatus) -> WatchState:
    """State after a successful poll. A missing status keeps polling."""
    if status.is_pending or status.status == 'unknown':
        return WatchState.POLLING
    if status.status == 'completed':
        return WatchState.SUCCEEDED
    return WatchState.FAILED


class TransactionChecker:
    def __init__(self, client: ThirdwebClient, console: Optional[Console] = None,
                 policy: Optional[WatchPolicy] = None, debug: bool = False,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.console = console or Console()
        self.policy = policy or WatchPolicy.from_config(client.config)
        self.debug = debug
        self.sleep = sleep

    def fetch_status(self, transaction_id: str) -> TransactionStatus:
        response = self.client.get_transaction_status(transaction_id)
        if self.debug:
            self.console.print("[dim]Raw API response:[/dim]")
            self.console.print(json.dumps(response, indent=2), markup=False)
        return TransactionStatus.from_response(response)

    def check(self, transaction_id: str) -> TransactionStatus:
        """Fetch and display the status once. Errors propagate to the caller."""
        self.console.print(f"[cyan]Checking status for transaction: {escape(transaction_id)}[/cyan]")
        status = self.fetch_status(transaction_id)
        self.display_status(status)
        return status

    def watch(self, transaction_id: str) -> WatchResult:
        """
        Poll until the transaction leaves the pending state or the attempt
        budget runs out.

        Every poll, failed or not, uses one attempt. A 404 is expected while
        the transaction is being indexed, so it is reported and retried.

        Returns:
            WatchResult: Final state, attempts used and the last status seen
        """
        self.console.print(f"[cyan]Watching transaction {escape(transaction_id)} until completion...[/cyan]")
        self.console.print("Press Ctrl+C to stop watching\n")

        state = WatchState.POLLING
        attempts = 0
        last_status = None

        while state == WatchState.POLLING:
            attempts += 1
            self.console.print(f"[bold]Watching transaction {escape(transaction_id)} (attempt {attempts}/{self.policy.max_attempts})[/bold]")

            try:
                last_status = self.fetch_status(transaction_id)
                self.display_status(last_status)
                state = next_watch_state(last_status)
            except APIError as e:
                logger.info(f"Error during watch of {transaction_id}: {e}")
                self.console.print(f"[red]Error during watch: {escape(str(e))}[/red]")
                if e.is_not_found:
                    self.console.print(f"[yellow]{NOT_FOUND_HINT}[/yellow]")
            except NetworkError as e:
                logger.info(f"Network error during watch of {transaction_id}: {e}")
                self.console.print(f"[red]Error during watch: {escape(str(e))}[/red]")

            if state != WatchState.POLLING:
                _, style = STATUS_STYLES.get(last_status.status, ('❓', 'red'))
                self.console.print(f"[{style}]Transaction {escape(last_status.status)}! Stopping watch mode.[/{style}]")
                break

            if attempts >= self.policy.max_attempts:
                state = WatchState.EXHAUSTED
                self.console.print("[yellow]Reached maximum watch time. Exiting...[/yellow]")
                break

            self.console.print(f"Waiting {self.policy.interval:g} seconds before next check... ({attempts}/{self.policy.max_attempts})")
            self.sleep(self.policy.interval)

        logger.info(f"Watch of {transaction_id} ended in state {state.value} after {attempts} attempts")
        return WatchResult(state=state, attempts=attempts, last_status=last_status)

    def display_status(self, status: TransactionStatus):
        icon, style = STATUS_STYLES.get(status.status, ('❓', 'white'))

        table = Table(title="Transaction Status", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Status", f"{icon} [{style}]{escape(status.status.upper())}[/{style}]")
        fields = [
            ("Transaction ID", status.transaction_id),
            ("Chain ID", status.chain_id),
            ("From", to_checksum_address(status.from_address) if status.from_address else None),
            ("To", to_checksum_address(status.to_address) if status.to_address else None),
            ("Contract Address", to_checksum_address(status.contract_address) if status.contract_address else None),
            ("Transaction Hash", status.transaction_hash),
            ("Block Number", status.block_number),
            ("Gas Used", status.gas_used),
            ("Gas Price", status.effective_gas_price),
            ("Created At", status.created_at),
            ("Updated At", status.updated_at)
        ]
        for label, value in fields:
            if value:
                table.add_row(label, escape(str(value)))
        if status.error:
            table.add_row("Error", f"[red]{escape(str(status.error))}[/red]")

        self.console.print(table)
