"""Client wrappers for the Ethereum node and 0x v2 contracts."""

from .chain import ChainClient, ChainError, TransactionRevertedError
from .context import ScenarioContext, build_context, open_context
from .exchange import ExchangeClient, OrderStatus
from .tokens import EtherTokenClient, TokenClient

__all__ = [
    "ChainClient",
    "ChainError",
    "TransactionRevertedError",
    "ScenarioContext",
    "build_context",
    "open_context",
    "ExchangeClient",
    "OrderStatus",
    "EtherTokenClient",
    "TokenClient",
]
