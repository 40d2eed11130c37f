"""Kraken REST client for the public market data and AddOrder endpoints."""

import socket
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlparse
from urllib.request import Request, urlopen

import structlog

from ..data.models import PriceBar
from ..data.parsers import parse_json_payload, parse_ohlc_bars, parse_ticker_price, unwrap_result
from ..errors import ConfigurationError, TransportError
from .orders import OrderRequest
from .signer import RequestSigner

USER_AGENT = "kraken-trader/0.1"

logger = structlog.get_logger(__name__)


class KrakenClient:
    """Blocking HTTP transport for the endpoints the trading engine needs."""

    def __init__(
        self,
        base_url: str = "https://api.kraken.com",
        api_version: str = "0",
        api_key: Optional[str] = None,
        signer: Optional[RequestSigner] = None,
        timeout_seconds: float = 10.0
    ):
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ConfigurationError(f"Invalid URL: {base_url}", field="exchange.base_url")

        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.api_key = api_key
        self.signer = signer
        self.timeout_seconds = timeout_seconds
        self.logger = logger

    def public_path(self, method: str) -> str:
        return f"/{self.api_version}/public/{method}"

    def private_path(self, method: str) -> str:
        return f"/{self.api_version}/private/{method}"

    def get_ticker_price(self, pair: str) -> float:
        """Last trade price for pair (``c[0]`` of the Ticker response)."""
        payload = self._get(self.public_path("Ticker"), {"pair": pair})
        return parse_ticker_price(payload, pair)

    def get_ohlc(self, pair: str, interval_minutes: int = 1) -> list[PriceBar]:
        """Chronological OHLC bars for pair at the given interval."""
        payload = self._get(
            self.public_path("OHLC"),
            {"pair": pair, "interval": interval_minutes}
        )
        return parse_ohlc_bars(payload, pair)

    def add_order(self, order: OrderRequest, validate_only: bool = False) -> dict[str, Any]:
        """
        Submit a signed AddOrder request.

        Returns:
            The ``result`` member of the response

        Raises:
            TransportError: On HTTP or network failure
            ExchangeRejection: If the exchange returned errors
        """
        form = order.to_form()
        if validate_only:
            form["validate"] = "true"

        result = self._post_private("AddOrder", form, order.nonce)
        return result if isinstance(result, dict) else {"result": result}

    def _post_private(self, method: str, form: dict[str, str], nonce: int) -> Any:
        if self.signer is None or not self.api_key:
            raise ConfigurationError(
                "API key and secret are required for private endpoints",
                field="exchange.api_key"
            )

        path = self.private_path(method)
        body = urlencode(form)
        headers = {
            "API-Key": self.api_key,
            "API-Sign": self.signer.sign(path, nonce, body),
            "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
            "User-Agent": USER_AGENT,
        }

        req = Request(
            self.base_url + path,
            data=body.encode("utf-8"),
            headers=headers,
            method="POST"
        )
        payload = self._send(req, method)
        return unwrap_result(payload, method)

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{path}?{urlencode(params)}"
        req = Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
        return self._send(req, path.rsplit("/", 1)[-1])

    def _send(self, req: Request, endpoint: str) -> dict[str, Any]:
        """Execute a request and decode its JSON body."""
        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()
                response_data = response.read()

        except HTTPError as e:
            self.logger.warning(
                "Kraken HTTP error",
                endpoint=endpoint,
                error_code=e.code,
                error_reason=str(e.reason)
            )
            raise TransportError(
                f"HTTP {e.code}: {e.reason}",
                status_code=e.code,
                endpoint=endpoint
            )

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning(
                "Kraken network error",
                endpoint=endpoint,
                error=str(e)
            )
            raise TransportError(f"Network error: {e}", endpoint=endpoint)

        if not 200 <= response_code < 300:
            raise TransportError(
                f"HTTP {response_code}: {response_data[:200]!r}",
                status_code=response_code,
                endpoint=endpoint
            )

        return parse_json_payload(response_data)
