"""
Logging Setup

Every module logs through the "makerwealth" logger hierarchy, written to stdout:

    from core.logging import logger, get_logger

    logger.info("AdapterManager initialized")          # makerwealth
    log = get_logger(__name__)                         # makerwealth.adapters.zksync.api_client
    log.debug("Fetching committed state: 0xabc")

What goes where:
    DEBUG    - request/response traces, raw RPC results
    INFO     - lifecycle and per-aggregation summaries ("Resolved 5/6 balance(s)")
    WARNING  - rate limits, retries, unknown networks
    ERROR    - failed balance fetches (one line per slot), startup failures

LOG_LEVEL in .env picks the level at import time; set_log_level() changes it later.
"""

import logging
import sys
from typing import Optional

from core.errors import AdapterFault

ROOT_LOGGER_NAME = "makerwealth"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> logging.Logger:
    """
    Configure stdout logging and return the application logger.

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Application started")
        2024-01-01 12:00:00 [INFO] makerwealth Application started
    """
    logging.basicConfig(
        level=_level(log_level),
        format=log_format or DEFAULT_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(_level(log_level))
    return app_logger


# ============================================
# Global Logger
# ============================================

def _configured_level() -> str:
    # core.config imports nothing from this module at import time
    from core.config import settings

    return settings.log_level


logger = setup_logging(log_level=_configured_level())


def get_logger(name: str) -> logging.Logger:
    """Child logger of the application logger (name is typically __name__)."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """Change the application and root log levels at runtime."""
    logger.setLevel(_level(level))
    logging.getLogger().setLevel(_level(level))


# ============================================
# Log Helpers
# ============================================

def log_api_request(source: str, endpoint: str, params: Optional[dict] = None) -> None:
    """
    Example:
        >>> log_api_request("loopring", "/user/balances", {"accountId": 10, "tokens": "0"})
        [DEBUG] API Request: loopring /user/balances | Params: {'accountId': 10, 'tokens': '0'}
    """
    suffix = f" | Params: {params}" if params else ""
    logger.debug(f"API Request: {source} {endpoint}{suffix}")


def log_api_response(source: str, endpoint: str, status: int, response_time: Optional[float] = None) -> None:
    """
    Example:
        >>> log_api_response("zksync", "/accounts/0xabc/committed", 200, 0.342)
        [DEBUG] API Response: zksync /accounts/0xabc/committed | Status: 200 | Time: 0.342s
    """
    suffix = f" | Time: {response_time:.3f}s" if response_time is not None else ""
    logger.debug(f"API Response: {source} {endpoint} | Status: {status}{suffix}")


def log_balance_fault(fault: AdapterFault) -> None:
    """
    Log a failed balance fetch with the context needed to trace it.

    Example:
        >>> log_balance_fault(AdapterFault("0xabc", 3, "ETH", RuntimeError("timeout")))
        [ERROR] GetTokenBalance fail, chainId: 3, makerAddress: 0xabc, tokenName: ETH, error: RuntimeError('timeout')
    """
    logger.error(
        f"GetTokenBalance fail, chainId: {fault.chain_id}, makerAddress: {fault.maker_address}, "
        f"tokenName: {fault.token_name}, error: {fault.cause!r}"
    )
