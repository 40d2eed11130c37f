"""
Kraken-specific data parsers for converting raw exchange payloads to
normalized objects.

This module handles the public Ticker and OHLC payloads and the common
``{"error": [...], "result": {...}}`` envelope shared by every endpoint.
"""

from datetime import datetime, timezone
from typing import Any, Union

import orjson

from ..errors import ExchangeRejection, MalformedDataError
from .models import PriceBar

OHLC_CLOSE_INDEX = 4


def parse_json_payload(raw_data: Union[str, bytes]) -> dict[str, Any]:
    """
    Parse raw JSON into a dictionary.

    Raises:
        MalformedDataError: If the payload is not a JSON object
    """
    try:
        payload = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(
            f"Invalid JSON: {e}",
            raw_data=str(raw_data)[:200],
            expected_format="json"
        )

    if not isinstance(payload, dict):
        raise MalformedDataError(
            "Expected a JSON object at the top level",
            raw_data=str(raw_data)[:200],
            expected_format="json object"
        )
    return payload


def unwrap_result(payload: dict[str, Any], endpoint: str = "") -> Any:
    """
    Validate the Kraken envelope and return its ``result`` member.

    Raises:
        ExchangeRejection: If the ``error`` array is non-empty
        MalformedDataError: If ``result`` is missing
    """
    errors = payload.get("error") or []
    if errors:
        raise ExchangeRejection(
            f"Kraken API error: {', '.join(str(e) for e in errors)}",
            errors=[str(e) for e in errors],
            endpoint=endpoint
        )

    if "result" not in payload:
        raise MalformedDataError(
            "Response has no 'result' member",
            expected_format="{error: [], result: {...}}"
        )
    return payload["result"]


def select_pair_entry(result: dict[str, Any], pair: str) -> Any:
    """
    Pick the entry for ``pair`` from a result mapping.

    Kraken may answer under its canonical pair name (``XXRPZUSD``) when the
    request used an alias (``XRPUSD``); if the requested key is absent and
    exactly one data key remains (ignoring ``last``), that entry is used.
    """
    if not isinstance(result, dict):
        raise MalformedDataError("Result must be a mapping keyed by pair")

    if pair in result:
        return result[pair]

    candidates = [key for key in result if key != "last"]
    if len(candidates) == 1:
        return result[candidates[0]]

    raise MalformedDataError(
        f"Pair {pair} missing from result",
        context={"available_pairs": candidates}
    )


def parse_ticker_price(payload: dict[str, Any], pair: str) -> float:
    """
    Extract the last trade price (``c[0]``) from a Ticker response.

    Raises:
        MalformedDataError: If the price is missing or not a positive number
    """
    entry = select_pair_entry(unwrap_result(payload, "Ticker"), pair)

    try:
        price = float(entry["c"][0])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Invalid ticker payload for {pair}: {e}",
            expected_format="{c: [price, volume]}"
        )

    if price <= 0:
        raise MalformedDataError(f"Non-positive ticker price for {pair}: {price}")
    return price


def parse_ohlc_row(row: list[Any]) -> PriceBar:
    """Parse ``[time, open, high, low, close, vwap, volume, count]``."""
    try:
        return PriceBar(
            ts=datetime.fromtimestamp(int(row[0]), tz=timezone.utc),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[OHLC_CLOSE_INDEX]),
            vwap=float(row[5]),
            volume=float(row[6]),
            count=int(row[7]),
        )
    except (IndexError, TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Invalid OHLC row: {e}",
            raw_data=str(row)[:200],
            expected_format="[time, open, high, low, close, vwap, volume, count]"
        )


def parse_ohlc_bars(payload: dict[str, Any], pair: str) -> list[PriceBar]:
    """
    Parse an OHLC response into chronologically ordered bars.

    Raises:
        MalformedDataError: If the rows are missing or malformed
    """
    rows = select_pair_entry(unwrap_result(payload, "OHLC"), pair)
    if not isinstance(rows, list):
        raise MalformedDataError(f"OHLC entry for {pair} must be a list of rows")

    bars = [parse_ohlc_row(row) for row in rows]
    bars.sort(key=lambda bar: bar.ts)
    return bars
