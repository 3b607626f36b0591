"""
Error Taxonomy

- MakerWealthError: base class for everything raised on purpose by this service
- InvalidArgument: bad caller input, raised before any I/O
- AdapterFault: a single balance fetch failed; absorbed at the slot boundary
"""

from typing import Optional


class MakerWealthError(Exception):
    """Base class for maker wealth errors."""


class InvalidArgument(MakerWealthError, ValueError):
    """Caller supplied a missing or malformed argument."""


class AdapterFault(MakerWealthError):
    """
    A chain adapter failed to produce a balance.

    Attributes:
        maker_address: Maker whose balance was requested
        chain_id: Chain the request was routed to
        token_name: Token display name of the slot
        cause: Underlying exception (network error, bad payload, timeout)
    """

    def __init__(
        self,
        maker_address: str,
        chain_id: int,
        token_name: str,
        cause: Optional[BaseException] = None
    ) -> None:
        self.maker_address = maker_address
        self.chain_id = chain_id
        self.token_name = token_name
        self.cause = cause
        reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(
            f"Balance fetch failed (chainId={chain_id}, maker={maker_address}, token={token_name}): {reason}"
        )
