"""Order dispatcher translating trade decisions into signed AddOrder calls."""

from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

from ..errors import ExchangeError, MalformedDataError
from ..state.models import TradeAction
from .client import KrakenClient
from .nonce import NonceGenerator
from .orders import LimitOrder, MarketOrder, OrderRequest, OrderSide, OrderType

logger = structlog.get_logger(__name__)


@dataclass
class OrderResult:
    """Outcome of a single order submission."""
    success: bool
    exchange_response: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None
    txids: list[str] = field(default_factory=list)
    order: Optional[OrderRequest] = None


class OrderDispatcher:
    """
    Builds, signs and submits one order per call.

    Every failure of the client call is reported through OrderResult rather
    than raised, so the caller decides whether to commit its pending state.
    No retries are performed here.
    """

    def __init__(
        self,
        client: KrakenClient,
        nonces: NonceGenerator,
        pair: str,
        order_type: OrderType = OrderType.MARKET,
        validate_only: bool = False
    ):
        self.client = client
        self.nonces = nonces
        self.pair = pair
        self.order_type = OrderType(order_type)
        self.validate_only = validate_only
        self.logger = logger.bind(pair=pair)

    def build_order(
        self,
        action: TradeAction,
        volume: float,
        price: Optional[float] = None
    ) -> OrderRequest:
        """Create the order variant for the configured order type with a fresh nonce."""
        if action == TradeAction.HOLD:
            raise ValueError("Hold decisions are not dispatchable")

        side = OrderSide(action.value)
        nonce = self.nonces.next()

        if self.order_type == OrderType.LIMIT:
            if price is None:
                raise ValueError("Limit orders require a price")
            return LimitOrder(nonce=nonce, pair=self.pair, side=side, volume=volume, price=price)

        return MarketOrder(nonce=nonce, pair=self.pair, side=side, volume=volume)

    def dispatch(
        self,
        action: TradeAction,
        volume: float,
        price: Optional[float] = None
    ) -> OrderResult:
        """
        Submit one order for action.

        Args:
            action: Buy or Sell
            volume: Order volume in base asset
            price: Limit price (required for limit orders, ignored otherwise)

        Returns:
            OrderResult describing success or failure
        """
        order = self.build_order(action, volume, price)

        self.logger.info(
            "Submitting order",
            side=order.side.value,
            order_type=order.order_type.value,
            volume=volume,
            price=price,
            nonce=order.nonce,
            validate_only=self.validate_only
        )

        try:
            response = self.client.add_order(order, validate_only=self.validate_only)

        except (ExchangeError, MalformedDataError) as e:
            self.logger.error(
                "Order submission failed",
                side=order.side.value,
                nonce=order.nonce,
                error_type=type(e).__name__,
                error=str(e)
            )
            return OrderResult(success=False, error_message=str(e), order=order)

        except Exception as e:
            self.logger.error(
                "Unexpected error submitting order",
                side=order.side.value,
                nonce=order.nonce,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True
            )
            return OrderResult(success=False, error_message=str(e), order=order)

        txids = [str(txid) for txid in response.get("txid", [])]
        self.logger.info(
            "Order accepted",
            side=order.side.value,
            nonce=order.nonce,
            txids=txids,
            description=response.get("descr")
        )
        return OrderResult(
            success=True,
            exchange_response=response,
            txids=txids,
            order=order
        )
