import sys

from wallet_deployer.cli import wallet_main
from rich import print as rprint

def main():
    """Main application entry point"""
    try:
        return wallet_main()
    except (KeyboardInterrupt, EOFError):
        rprint("\n[yellow]Application terminated by user[/yellow]")
        return 130

if __name__ == "__main__":
    sys.exit(main())
