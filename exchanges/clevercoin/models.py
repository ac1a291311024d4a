from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class HttpMethod(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"


@dataclass(frozen=True)
class Credentials:
    api_key: str
    api_secret: str = field(repr=False)

    @property
    def has_keys(self) -> bool:
        return bool(self.api_key and self.api_secret)


@dataclass
class CallSpec:
    visibility: Visibility
    method: HttpMethod
    name: str
    query_params: Dict[str, str] = field(default_factory=dict)
    body_params: Dict[str, str] = field(default_factory=dict)


@dataclass
class PreparedRequest:
    """Wire-ready form of a CallSpec: verb, path, headers and encoded body."""

    method: HttpMethod
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass
class Ticker:
    timestamp: int | None
    low: Optional[float]
    high: Optional[float]
    ask: Optional[float]
    bid: Optional[float]
    last: Optional[float]
    volume: Optional[float]

    @classmethod
    def from_payload(cls, payload: Mapping) -> "Ticker":
        def _num(key: str) -> Optional[float]:
            value = payload.get(key)
            return float(value) if value not in (None, "") else None

        ts = payload.get("timestamp")
        return cls(
            timestamp=int(ts) if ts is not None else None,
            low=_num("low"),
            high=_num("high"),
            ask=_num("ask"),
            bid=_num("bid"),
            last=_num("last"),
            volume=_num("volume"),
        )

    @property
    def spread(self) -> Optional[float]:
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid


@dataclass
class OrderBook:
    timestamp: int | None
    bids: List[tuple[float, float]] = field(default_factory=list)
    asks: List[tuple[float, float]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping) -> "OrderBook":
        ts = payload.get("timestamp")
        return cls(
            timestamp=int(ts) if ts is not None else None,
            bids=cls._parse_levels(payload.get("bids") or []),
            asks=cls._parse_levels(payload.get("asks") or []),
        )

    @staticmethod
    def _parse_levels(levels: List) -> List[tuple[float, float]]:
        parsed: List[tuple[float, float]] = []
        for level in levels:
            if len(level) < 2:
                continue
            parsed.append((float(level[0]), float(level[1])))
        return parsed

    def best_bid(self) -> Optional[tuple[float, float]]:
        return max(self.bids, key=lambda lvl: lvl[0]) if self.bids else None

    def best_ask(self) -> Optional[tuple[float, float]]:
        return min(self.asks, key=lambda lvl: lvl[0]) if self.asks else None
