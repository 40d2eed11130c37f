"""Order request models for the AddOrder endpoint."""

from dataclasses import dataclass
from enum import Enum


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"


def format_decimal(value: float) -> str:
    """Render a quantity or price without float noise or trailing zeros."""
    text = f"{value:.8f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class OrderRequest:
    """Fields shared by every order variant."""
    nonce: int
    pair: str
    side: OrderSide
    volume: float

    order_type = OrderType.MARKET

    def __post_init__(self):
        if self.volume <= 0:
            raise ValueError(f"Order volume must be positive, got {self.volume}")

    def to_form(self) -> dict[str, str]:
        """AddOrder form fields in wire order."""
        return {
            "nonce": str(self.nonce),
            "pair": self.pair,
            "type": self.side.value,
            "ordertype": self.order_type.value,
            "volume": format_decimal(self.volume),
        }


@dataclass(frozen=True)
class MarketOrder(OrderRequest):
    """Order filled at the best available price; carries no price."""

    order_type = OrderType.MARKET


@dataclass(frozen=True)
class LimitOrder(OrderRequest):
    """Order resting at a limit price."""
    price: float = 0.0

    order_type = OrderType.LIMIT

    def __post_init__(self):
        super().__post_init__()
        if self.price <= 0:
            raise ValueError(f"Limit order requires a positive price, got {self.price}")

    def to_form(self) -> dict[str, str]:
        form = super().to_form()
        form["price"] = format_decimal(self.price)
        return form
