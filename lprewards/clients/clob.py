"""CLOB REST client: reward markets, order books and price history.

Only public endpoints are used; no credentials are needed.
"""

from __future__ import annotations

import asyncio
import ssl
from typing import Any

import aiohttp
import certifi
import structlog

from lprewards.config import RewardsConfig
from lprewards.constants import (
    PRICE_HISTORY_FIDELITY_MIN,
    REWARD_MARKETS_PAGE_LIMIT,
    OrderType,
    OutcomeSide,
)
from lprewards.types import Market, Order, PricePoint
from lprewards.utils.retry import NETWORK_ERRORS, async_retry
from lprewards.utils.time import from_unix

logger = structlog.get_logger(__name__)

_HISTORY_ERRORS = (*NETWORK_ERRORS, ValueError, KeyError, TypeError)


class ClobMarketDataClient:
    """Async market-data provider backed by the Polymarket CLOB API."""

    def __init__(self, config: RewardsConfig) -> None:
        self._config = config
        self._base_url = config.clob_host
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> None:
        ssl_ctx = ssl.create_default_context(cafile=certifi.where())
        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=ssl_ctx),
            timeout=aiohttp.ClientTimeout(total=self._config.request_timeout_sec),
        )
        logger.info("CLOB client connected", url=self._base_url)

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("CLOB client not connected. Call connect() first.")
        return self._session

    # ------------------------------------------------------------------
    # Reward markets
    # ------------------------------------------------------------------

    async def get_reward_markets(self) -> list[dict]:
        """Fetch reward-eligible markets from /rewards/markets/current.

        Markets paying less than ``min_daily_reward`` per day are dropped,
        the rest are enriched with /markets/{id} metadata and returned
        highest reward first. Returns dicts with keys:
          condition_id, question, tokens, daily_reward, rewards_max_spread,
          rewards_min_size
        """
        all_items: list[dict] = []
        cursor = ""
        for page in range(REWARD_MARKETS_PAGE_LIMIT):
            data = await self._fetch_reward_page(cursor)
            if data is None:
                logger.warning("clob.rewards_page_error", page=page)
                break
            items = data.get("data", [])
            cursor = data.get("next_cursor", "")
            all_items.extend(items)
            if not items or not cursor or cursor == "LTE=":
                break

        reward_items = []
        for item in all_items:
            daily = sum(float(c.get("rate_per_day", 0)) for c in item.get("rewards_config", []) or [])
            if daily >= self._config.min_daily_reward:
                reward_items.append((daily, item))
        reward_items.sort(key=lambda x: x[0], reverse=True)

        results: list[dict] = []
        for daily, item in reward_items[: self._config.max_markets * 3]:
            cid = item["condition_id"]
            try:
                mdata = await self._fetch_market(cid)
            except NETWORK_ERRORS as e:
                logger.warning("clob.market_enrich_failed", market=cid[:12], error=str(e))
                continue
            if not mdata or not mdata.get("active", False) or mdata.get("closed", True):
                continue
            results.append({
                "condition_id": cid,
                "question": mdata.get("question", ""),
                "tokens": mdata.get("tokens", []),
                "daily_reward": daily,
                "rewards_max_spread": float(item.get("rewards_max_spread", 0)) / 100.0,
                "rewards_min_size": float(item.get("rewards_min_size", 0)),
            })

        logger.info(
            "clob.reward_markets_fetched",
            total=len(all_items),
            above_threshold=len(reward_items),
            enriched=len(results),
        )
        return results

    @async_retry(max_attempts=3, base_delay=1.0)
    async def _fetch_reward_page(self, cursor: str) -> dict | None:
        params: dict[str, str] = {"limit": "100"}
        if cursor:
            params["next_cursor"] = cursor
        async with self.session.get(
            f"{self._base_url}/rewards/markets/current", params=params
        ) as resp:
            if resp.status != 200:
                return None
            return await resp.json()

    @async_retry(max_attempts=3, base_delay=1.0)
    async def _fetch_market(self, condition_id: str) -> dict | None:
        async with self.session.get(f"{self._base_url}/markets/{condition_id}") as resp:
            if resp.status == 404:
                return None
            resp.raise_for_status()
            return await resp.json()

    @staticmethod
    def to_market(raw: dict) -> Market | None:
        """Convert an enriched reward-market dict into a Market snapshot.

        The YES token price is the midpoint. Payloads without a usable
        midpoint or max spread are skipped.
        """
        tokens = raw.get("tokens", []) or []
        yes = next(
            (t for t in tokens if str(t.get("outcome", "")).lower() == "yes"),
            tokens[0] if tokens else None,
        )
        midpoint = float(yes.get("price", 0)) if yes else 0.0
        max_spread = float(raw.get("rewards_max_spread", 0))
        if not 0 < midpoint < 1 or max_spread <= 0:
            logger.warning(
                "clob.market_skipped",
                market=str(raw.get("condition_id", ""))[:12],
                midpoint=midpoint,
                max_spread=max_spread,
            )
            return None
        return Market(
            midpoint=midpoint,
            max_spread=max_spread,
            min_size=float(raw.get("rewards_min_size", 0)),
            reward_pool=float(raw.get("daily_reward", 0)),
            condition_id=str(raw.get("condition_id", "")),
            question=raw.get("question", ""),
        )

    @staticmethod
    def yes_token_id(raw: dict) -> str | None:
        tokens = raw.get("tokens", []) or []
        for t in tokens:
            if str(t.get("outcome", "")).lower() == "yes":
                return str(t.get("token_id", "")) or None
        if tokens:
            return str(tokens[0].get("token_id", "")) or None
        return None

    # ------------------------------------------------------------------
    # Order book
    # ------------------------------------------------------------------

    @async_retry(max_attempts=3, base_delay=1.0)
    async def get_order_book(self, token_id: str) -> list[Order]:
        """Resting YES-token orders: bids as YES BIDs, asks as YES ASKs."""
        async with self.session.get(
            f"{self._base_url}/book", params={"token_id": token_id}
        ) as resp:
            resp.raise_for_status()
            data = await resp.json()
        return self.parse_order_book(data)

    @staticmethod
    def parse_order_book(data: dict) -> list[Order]:
        orders: list[Order] = []
        for key, order_type in (("bids", OrderType.BID), ("asks", OrderType.ASK)):
            for level in data.get(key, []) or []:
                orders.append(Order(
                    price=float(level.get("price", 0)),
                    size=float(level.get("size", 0)),
                    side=OutcomeSide.YES,
                    type=order_type,
                ))
        return orders

    # ------------------------------------------------------------------
    # Price history
    # ------------------------------------------------------------------

    async def get_price_history(
        self, condition_id: str, lookback_days: int = 7
    ) -> list[PricePoint]:
        """Hourly YES-token prices over the lookback window.

        Never raises: any failure or missing data yields an empty list, which
        the optimizer treats as "no volatility data".
        """
        try:
            token_id = await self._fetch_yes_token_id(condition_id)
            if not token_id:
                logger.warning("clob.no_yes_token", market=condition_id[:12])
                return []
            data = await self._fetch_price_history(token_id, history_interval(lookback_days))
        except _HISTORY_ERRORS as e:
            logger.warning(
                "clob.price_history_failed", market=condition_id[:12], error=str(e)
            )
            return []

        points = self.parse_price_history(data)
        logger.debug("clob.price_history_fetched", market=condition_id[:12], points=len(points))
        return points

    @async_retry(max_attempts=3, base_delay=1.0)
    async def _fetch_yes_token_id(self, condition_id: str) -> str | None:
        async with self.session.get(
            f"{self._base_url}/markets", params={"condition_id": condition_id}
        ) as resp:
            resp.raise_for_status()
            data = await resp.json()
        markets = data.get("data", []) if isinstance(data, dict) else data
        if not markets:
            return None
        return self.yes_token_id(markets[0])

    @async_retry(max_attempts=3, base_delay=1.0)
    async def _fetch_price_history(self, token_id: str, interval: str) -> dict:
        params = {
            "market": token_id,
            "interval": interval,
            "fidelity": str(PRICE_HISTORY_FIDELITY_MIN),
        }
        async with self.session.get(
            f"{self._base_url}/prices-history", params=params
        ) as resp:
            resp.raise_for_status()
            return await resp.json()

    @staticmethod
    def parse_price_history(data: Any) -> list[PricePoint]:
        """Parse ``{"history": [{"t": unix_sec, "p": price}, ...]}``, skipping bad rows."""
        if not isinstance(data, dict):
            return []
        points: list[PricePoint] = []
        for row in data.get("history", []) or []:
            try:
                points.append(PricePoint(timestamp=from_unix(row["t"]), price=float(row["p"])))
            except (KeyError, TypeError, ValueError):
                continue
        return points


def history_interval(lookback_days: int) -> str:
    """CLOB ``interval`` parameter covering the lookback window."""
    if lookback_days >= 7:
        return "1w"
    if lookback_days >= 1:
        return "1d"
    return "6h"


async def gather_books(
    client: ClobMarketDataClient, token_ids: list[str]
) -> list[list[Order]]:
    """Fetch several order books concurrently; failed books come back empty."""
    results = await asyncio.gather(
        *(client.get_order_book(t) for t in token_ids), return_exceptions=True
    )
    books: list[list[Order]] = []
    for token_id, result in zip(token_ids, results):
        if isinstance(result, BaseException):
            logger.warning("clob.book_failed", token_id=token_id[:12], error=str(result))
            books.append([])
        else:
            books.append(result)
    return books
