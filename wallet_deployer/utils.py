"""
Utility functions for the Thirdweb Wallet Deployer application.
"""
import os
import re
import json
import time
import logging
import datetime
from typing import Any, Dict, Optional
from web3 import Web3

from .config import LOG_FILE, OUTPUT_DIR

logger = logging.getLogger("wallet_deployer")

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = False, log_file: Optional[str] = LOG_FILE) -> None:
    """
    Configure application logging.

    Everything at DEBUG/INFO goes to the log file; the console only shows
    warnings unless debug is enabled, so log lines don't interleave with
    the prompts.

    Args:
        debug (bool): Show debug output on the console
        log_file (str, optional): Log file path, or None to skip file logging
    """
    handlers = []
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    handlers.append(stream_handler)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )


def is_valid_email(email: Optional[str]) -> bool:
    """
    Check an email address against a simple ``name@domain.tld`` pattern.

    Args:
        email (str): The email address to check

    Returns:
        bool: True if the address looks valid
    """
    if not email:
        return False
    return EMAIL_PATTERN.match(email) is not None


def validate_address(address: str) -> bool:
    """
    Validate if an address is a valid EVM address.

    Args:
        address (str): The address to validate

    Returns:
        bool: True if valid, False otherwise
    """
    try:
        return Web3.is_address(address)
    except Exception:
        return False


def to_checksum_address(address: str) -> str:
    """
    Convert an address to checksum format for display.

    Addresses that are not valid hex are returned unchanged.
    """
    if not address:
        return ""
    if not validate_address(address):
        logger.debug(f"Not converting non-EVM address: {address}")
        return address
    return Web3.to_checksum_address(address)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat().replace('+00:00', 'Z')


def build_output_filename(prefix: str, address: str, timestamp_ms: Optional[int] = None) -> str:
    """Name an output file ``<prefix>-<first 8 address chars>-<epoch ms>.json``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}-{address[:8]}-{timestamp_ms}.json"


def save_json_file(data: Dict[str, Any], filename: str, output_dir: str = OUTPUT_DIR) -> str:
    """
    Write data as indented JSON.

    Args:
        data (dict): JSON-serializable data
        filename (str): File name inside output_dir
        output_dir (str): Directory to write into

    Returns:
        str: Path of the written file
    """
    path = os.path.join(output_dir, filename)
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info(f"Saved {path}")
    return path
