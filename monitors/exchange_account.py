"""Hyperliquid account monitor for spot trades and derivative positions."""

import hashlib
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.log import get_logger
from core.models.domain.change import Change
from core.utils import format_timestamp
from monitors.base import BaseMonitor
from monitors.exceptions import ExtractionError, ParseError

logger = get_logger(__name__)

SIZE_PRECISION = 4
PRICE_PRECISION = 2
NO_POSITIONS = "No active positions"


class Position(BaseModel):
    """An open derivative position."""

    model_config = ConfigDict(frozen=True)

    coin: str
    size: float
    entry_price: float

    @property
    def direction(self) -> str:
        return "long" if self.size > 0 else "short"

    def normalized(self) -> tuple[str, str, str, str]:
        """Fields that identify the position, rounded for hashing."""
        return (
            self.coin,
            f"{abs(self.size):.{SIZE_PRECISION}f}",
            f"{self.entry_price:.{PRICE_PRECISION}f}",
            self.direction,
        )

    def describe(self) -> str:
        coin, size, price, direction = self.normalized()
        return f"{coin} {direction} {size} @ {price}"


def position_fingerprint(positions: Iterable[Position]) -> str:
    """SHA-256 over the sorted normalized positions, independent of order."""
    rows = sorted("|".join(position.normalized()) for position in positions)
    return hashlib.sha256("\n".join(rows).encode("utf-8")).hexdigest()


def is_spot_coin(coin: str) -> bool:
    """Spot fills use ``@<index>`` or ``BASE/QUOTE`` coin names."""
    return coin.startswith("@") or "/" in coin


def _to_float(value: Any, field: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid {field}: {value!r}") from e


def parse_positions(state: Any) -> list[Position]:
    """Open positions from a clearinghouseState response.

    Raises:
        ParseError: If the response does not have the expected shape
    """
    if not isinstance(state, dict) or not isinstance(
        state.get("assetPositions"), list
    ):
        raise ParseError("Clearinghouse state has no assetPositions list")

    positions = []
    for entry in state["assetPositions"]:
        raw = entry.get("position") if isinstance(entry, dict) else None
        if not isinstance(raw, dict) or "coin" not in raw:
            raise ParseError(f"Malformed asset position: {entry!r}")

        size = _to_float(raw.get("szi"), "position size")
        if size == 0:
            continue
        positions.append(
            Position(
                coin=str(raw["coin"]),
                size=size,
                entry_price=_to_float(raw.get("entryPx") or 0, "entry price"),
            )
        )
    return positions


class ExchangeAccountMonitor(BaseMonitor):
    """Watch an account's latest spot trade and its open positions.

    At most one change is reported per check: a spot trade wins over a
    position change, which is then reported on the next check.
    """

    label = "Hyperliquid account monitor"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.last_trade_id: str | None = None
        self.last_fingerprint: str | None = None

    @property
    def address(self) -> str:
        return self.config.endpoint

    async def check(self) -> Change | None:
        if self.config.watch_spot:
            change = await self.check_spot_trades()
            if change is not None:
                return change

        if self.config.watch_derivatives:
            return await self.check_positions()

        return None

    async def _info(self, query_type: str) -> Any:
        return await self.fetch_json(
            self.settings.exchange_info_url,
            method="POST",
            payload={"type": query_type, "user": self.address},
        )

    async def check_spot_trades(self) -> Change | None:
        fills = await self._info("userFills")
        if not isinstance(fills, list):
            raise ParseError("User fills response is not a list")

        spot_fills = [
            fill
            for fill in fills
            if isinstance(fill, dict) and is_spot_coin(str(fill.get("coin", "")))
        ]
        if not spot_fills:
            logger.debug(f"No spot trades found for {self.address}")
            return None

        latest = spot_fills[0]
        trade_id = latest.get("tid")
        if isinstance(trade_id, bool) or not isinstance(trade_id, (int, str)):
            raise ExtractionError(f"Transaction ID format is incorrect: {trade_id!r}")
        trade_id = str(trade_id)

        if trade_id == self.last_trade_id:
            return None

        first = self.last_trade_id is None
        self.last_trade_id = trade_id

        asset = latest.get("coin", "Unknown")
        side = "Buy" if latest.get("side") == "B" else "Sell"
        details = (
            f"User: {self.address}\n"
            f"Asset: {asset}\n"
            f"Direction: {side}\n"
            f"Price: {latest.get('px', '0')}\n"
            f"Size: {latest.get('sz', '0')}\n"
            f"Time: {format_timestamp(latest.get('time'))}\n"
            f"Transaction ID: {trade_id}"
        )

        if first:
            logger.debug(f"First spot trade seen for {self.address}: {trade_id}")
            return Change(
                message=f"start: {self.notes()}",
                details=f"Latest spot trade:\n{details}",
            )

        logger.info(f"New spot trade for {self.address}: {asset} {side}")
        return Change(
            message=f"{self.notes()} new spot trade: {asset} {side}",
            details=details,
        )

    async def check_positions(self) -> Change | None:
        positions = parse_positions(await self._info("clearinghouseState"))
        fingerprint = position_fingerprint(positions)

        if fingerprint == self.last_fingerprint:
            return None

        first = self.last_fingerprint is None
        self.last_fingerprint = fingerprint

        if positions:
            summary = "\n".join(
                position.describe()
                for position in sorted(positions, key=lambda p: p.coin)
            )
        else:
            summary = NO_POSITIONS
        details = f"User: {self.address}\n{summary}"

        if first:
            return Change(message=f"start: {self.notes()}", details=details)

        if not positions:
            logger.info(f"All positions closed for {self.address}")
            return Change(
                message=f"{self.notes()} closed all positions",
                details=details,
            )

        logger.info(f"Positions changed for {self.address}")
        return Change(message=f"{self.notes()} positions changed", details=details)
