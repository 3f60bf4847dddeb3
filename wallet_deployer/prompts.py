"""
Console input for the interactive flows.
"""
import logging
from typing import Optional, TextIO
from rich.console import Console
from rich.prompt import Prompt

logger = logging.getLogger("wallet_deployer.prompts")

YES_ANSWERS = ('y', 'yes')


class LinePrompt(Prompt):
    """Prompt that treats an exhausted stream as end of input."""

    @classmethod
    def get_input(cls, console: Console, prompt, password: bool, stream: Optional[TextIO] = None) -> str:
        line = super().get_input(console, prompt, password, stream=stream)
        if stream is None:
            return line
        if line == "":
            raise EOFError("No more input")
        return line.rstrip("\r\n")


class ConsolePrompter:
    """
    Reads answers from the console.

    Acquire one per process with ``with ConsolePrompter() as prompter:``;
    it refuses input once closed. ``stream`` replaces stdin, which is how
    the tests feed answers.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self.stream = stream
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        if not self.closed:
            logger.debug("Closing console prompter")
        self.closed = True

    def ask(self, message: str, default: Optional[str] = None) -> str:
        """
        Ask a question and return the stripped answer.

        An empty answer returns default when one is given.

        Raises:
            EOFError: If input is exhausted
        """
        if self.closed:
            raise RuntimeError("Prompter is closed")

        options = {} if default is None else {'default': default}
        answer = LinePrompt.ask(
            f"[bold cyan]{message}[/bold cyan]",
            console=self.console,
            stream=self.stream,
            **options
        )
        return answer.strip()

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; only 'y' or 'yes' count as yes."""
        answer = self.ask(f"{message} (y/n)")
        return answer.lower() in YES_ANSWERS

    def ask_otp(self) -> str:
        """Ask for the emailed one-time code until one of at least 4 characters is given."""
        while True:
            otp = self.ask("Enter the OTP code from your email")
            if len(otp) >= 4:
                return otp
            self.console.print("[yellow]Invalid OTP code. Please try again.[/yellow]")
