"""
Kraken exchange integration.

Nonce generation, request signing, order models, the REST client and the
order dispatcher used by the trading engine.
"""
from .client import KrakenClient
from .dispatcher import OrderDispatcher, OrderResult
from .nonce import NonceGenerator
from .orders import LimitOrder, MarketOrder, OrderRequest, OrderSide, OrderType
from .signer import RequestSigner, sign_request

__all__ = [
    "KrakenClient",
    "OrderDispatcher",
    "OrderResult",
    "NonceGenerator",
    "OrderRequest",
    "MarketOrder",
    "LimitOrder",
    "OrderSide",
    "OrderType",
    "RequestSigner",
    "sign_request",
]
