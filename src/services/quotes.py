"""
Weather and gold quotes from public APIs.
Both calls return None when the upstream is unavailable.
"""
import logging
import math
from typing import List, Optional

import httpx

from core.entities import GoldQuote, WeatherSnapshot

logger = logging.getLogger(__name__)

OZ_TO_G = 31.1034768
DEFAULT_USD_INR = 83.0

HYDERABAD_LAT = 17.3850
HYDERABAD_LON = 78.4867

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
FX_URL = "https://api.exchangerate.host/latest"
GOLD_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/XAUUSD=X"


def _round(value: float) -> int:
    """Round half up."""
    return int(math.floor(value + 0.5))


def _tomorrow(values: Optional[List], default=None):
    if not values or len(values) < 2 or values[1] is None:
        return default
    return values[1]


class QuoteSource:
    def __init__(
        self,
        *,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"User-Agent": "Mozilla/5.0 (compatible; newsdesk/1.0)"},
        )

    async def weather(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        """Tomorrow's forecast."""
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": "weathercode,temperature_2m_max,temperature_2m_min,precipitation_probability_mean",
            "timezone": "Asia/Kolkata",
        }
        try:
            async with self._client() as client:
                resp = await client.get(FORECAST_URL, params=params)
                resp.raise_for_status()
                daily = (resp.json() or {}).get("daily") or {}
        except Exception as e:
            logger.warning(f"Weather lookup failed: {e!r}")
            return None

        high = _tomorrow(daily.get("temperature_2m_max"))
        low = _tomorrow(daily.get("temperature_2m_min"))
        if high is None or low is None:
            return None

        return WeatherSnapshot(
            high=_round(high),
            low=_round(low),
            pop=_tomorrow(daily.get("precipitation_probability_mean"), 0),
            code=_tomorrow(daily.get("weathercode"), 0),
        )

    async def gold_rate(self) -> Optional[GoldQuote]:
        """INR per gram today, plus an estimate from the mean daily change of the last week."""
        try:
            async with self._client() as client:
                fx_resp = await client.get(FX_URL, params={"base": "USD", "symbols": "INR"})
                fx = fx_resp.json() if fx_resp.status_code == 200 else {}
                usd_in_inr = ((fx or {}).get("rates") or {}).get("INR") or DEFAULT_USD_INR

                chart_resp = await client.get(GOLD_CHART_URL, params={"range": "7d", "interval": "1d"})
                chart_resp.raise_for_status()
                chart = chart_resp.json()
        except Exception as e:
            logger.warning(f"Gold lookup failed: {e!r}")
            return None

        try:
            quote = chart["chart"]["result"][0]["indicators"]["quote"][0]
            closes = [c for c in quote.get("close") or [] if c]
        except (KeyError, IndexError, TypeError):
            closes = []

        if not closes:
            return None

        inr_per_gram = (closes[-1] * usd_in_inr) / OZ_TO_G
        g24 = _round(inr_per_gram)
        g22 = _round(inr_per_gram * (22 / 24))

        changes = [
            (closes[i] - closes[i - 1]) / closes[i - 1]
            for i in range(1, len(closes))
        ]
        mean = sum(changes) / max(1, len(closes) - 1)

        return GoldQuote(
            g24=g24,
            g22=g22,
            tomorrow_g24=_round(g24 * (1 + mean)),
            tomorrow_g22=_round(g22 * (1 + mean)),
        )
