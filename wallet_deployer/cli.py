"""
Command line entry points.
"""
import argparse
import logging
from typing import List, Optional
from rich.console import Console
from rich.markup import escape

from .client import ThirdwebClient
from .config import load_config
from .exceptions import WalletDeployerError, ConfigurationError, ErrorKind
from .flow import WalletDeployFlow
from .prompts import ConsolePrompter
from .transactions import TransactionChecker, CHECK_ID_HINT
from .utils import setup_logging, is_valid_email

logger = logging.getLogger("wallet_deployer.cli")

ENVIRONMENT_HELP = """
Environment Variables:
  THIRDWEB_API_KEY              Your thirdweb secret key (required)
  THIRDWEB_BASE_URL             Base URL for the thirdweb API (optional)
  DEFAULT_CHAIN_ID              Default chain ID (optional, default 1)
  THIRDWEB_ECOSYSTEM_ID         Ecosystem ID for ecosystem wallets (optional)
  THIRDWEB_ECOSYSTEM_PARTNER_ID Ecosystem partner ID (optional)
"""


def build_wallet_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wallet-deployer",
        description="Create a thirdweb wallet with email login and deploy an ERC-20 token.",
        epilog=ENVIRONMENT_HELP + """
Examples:
  wallet-deployer
  wallet-deployer --email user@example.com
  wallet-deployer --email user@example.com --ecosystem-id ecosystem.my-app
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--email', help="Email address for wallet creation (skips the email prompt)")
    parser.add_argument('--ecosystem-id', help="Ecosystem ID for ecosystem wallet creation")
    parser.add_argument('--ecosystem-partner-id', help="Ecosystem partner ID (optional)")
    parser.add_argument('--debug', action='store_true', help="Show debug logging")
    return parser


def build_transaction_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-transaction",
        description="Check the status of a thirdweb transaction.",
        epilog=ENVIRONMENT_HELP + """
Examples:
  check-transaction abc123-def456-ghi789
  check-transaction abc123-def456-ghi789 --watch
  check-transaction abc123-def456-ghi789 --debug
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('transaction_id', nargs='?', help="Transaction ID to check")
    parser.add_argument('-w', '--watch', action='store_true',
                        help="Watch the transaction until completion (polls every few seconds)")
    parser.add_argument('-d', '--debug', action='store_true', help="Show raw API responses and debug logging")
    return parser


def print_error(console: Console, title: str, error: WalletDeployerError):
    console.print(f"\n[red]{title}: {escape(error.error)}[/red]")
    if error.status_code is not None:
        console.print(f"[red]Status: {error.status_code}[/red]")
    if error.message and error.message != error.error:
        console.print(f"[red]Message: {escape(error.message)}[/red]")


def print_config_error(console: Console, error: ConfigurationError):
    console.print(f"[red]Error: {escape(error.message)}[/red]")
    console.print("Please create a .env file with your thirdweb secret key (see .env.example)")


def wallet_main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Run the wallet creation and deployment tool. Returns the exit code."""
    args = build_wallet_parser().parse_args(argv)
    console = console or Console()
    setup_logging(args.debug)

    if args.email is not None and not is_valid_email(args.email):
        console.print("[red]Invalid email format provided[/red]")
        return 1

    try:
        config = load_config(args.ecosystem_id, args.ecosystem_partner_id)
    except ConfigurationError as e:
        print_config_error(console, e)
        return 1

    with ThirdwebClient(config) as client, ConsolePrompter(console) as prompter:
        flow = WalletDeployFlow(client, prompter, console)
        try:
            if args.email:
                flow.run_non_interactive(args.email, config.ecosystem_id, config.ecosystem_partner_id)
            else:
                flow.run_interactive()
        except (KeyboardInterrupt, EOFError):
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            return 130
        except WalletDeployerError as e:
            logger.info(f"Wallet flow failed ({e.kind.value}): {e}")
            title = "Invalid input" if e.kind == ErrorKind.VALIDATION else "Error"
            print_error(console, title, e)
            return 1
        except Exception as e:
            logger.exception("Unexpected error")
            console.print(f"\n[red]Unexpected error: {escape(str(e))}[/red]")
            return 1

    return 0


def check_transaction_main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Run the transaction status checker. Returns the exit code."""
    args = build_transaction_parser().parse_args(argv)
    console = console or Console()
    setup_logging(args.debug)

    if not args.transaction_id:
        console.print("[red]Error: Transaction ID is required[/red]")
        console.print("Usage: check-transaction <transaction-id>")
        console.print("Example: check-transaction abc123-def456-ghi789")
        return 1

    try:
        config = load_config()
    except ConfigurationError as e:
        print_config_error(console, e)
        return 1

    with ThirdwebClient(config) as client:
        checker = TransactionChecker(client, console, debug=args.debug)
        try:
            if args.watch:
                checker.watch(args.transaction_id)
            else:
                checker.check(args.transaction_id)
        except KeyboardInterrupt:
            console.print("\n[yellow]Stopped checking transaction[/yellow]")
            return 130
        except WalletDeployerError as e:
            logger.info(f"Transaction check failed ({e.kind.value}): {e}")
            print_error(console, "Error checking transaction", e)
            if e.status_code == 404:
                console.print(f"\n[yellow]{CHECK_ID_HINT}[/yellow]")
            return 1
        except Exception as e:
            logger.exception("Unexpected error")
            console.print(f"\n[red]Unexpected error: {escape(str(e))}[/red]")
            return 1

    return 0
