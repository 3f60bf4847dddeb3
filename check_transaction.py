import sys

from wallet_deployer.cli import check_transaction_main
from rich import print as rprint

def main():
    """Transaction status checker entry point"""
    try:
        return check_transaction_main()
    except KeyboardInterrupt:
        rprint("\n[yellow]Stopped checking transaction[/yellow]")
        return 130

if __name__ == "__main__":
    sys.exit(main())
