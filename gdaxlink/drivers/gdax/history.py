# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/history.py
"""
Historical trade backfill from the candles endpoint.

Without a start time one coarse page of the most recent activity is fetched
and the walk stops. With a start time the walker requests consecutive
windows of ``window`` length from the cursor, yields each page sorted by
timestamp, paces itself between pages and stops on the first empty page.

Memory stays at one page: the buffer is dropped before the next request.
Errors propagate out of the generator; whatever was already yielded stays
yielded, so consumers must treat the sequence as possibly truncated.
"""

import logging
import time
from datetime import timedelta

from gdaxlink.core.models import Trade
from gdaxlink.drivers.gdax.util import decoding, from_unix_seconds, iso_seconds, to_decimal, to_unix_seconds

logger = logging.getLogger(__name__)

RECENT_GRANULARITY = 1800
BACKFILL_GRANULARITY = 60
BACKFILL_WINDOW = timedelta(minutes=5)
PACING_SECONDS = 1.0


class HistoryWalker(object):
    def __init__(self, client, recent_granularity=RECENT_GRANULARITY, backfill_granularity=BACKFILL_GRANULARITY,
                 window=BACKFILL_WINDOW, pacing_seconds=PACING_SECONDS, sleep=time.sleep):
        self.client = client
        self.recent_granularity = recent_granularity
        self.backfill_granularity = backfill_granularity
        self.window = window
        self.pacing_seconds = pacing_seconds
        self._sleep = sleep

    def iter_trades(self, symbol, since=None):
        """
        :param symbol: GDAX product id, e.g. 'BTC-USD'
        :param since: aware/naive UTC datetime to backfill from, or None for recent mode
        :return: generator of Trade, timestamps non-decreasing
        """
        if since is None:
            page = self._fetch(symbol, self.recent_granularity)
            for trade in self._sorted(page):
                yield trade
            return

        cursor = from_unix_seconds(to_unix_seconds(since))
        last_ts = None
        pages = 0
        while True:
            if pages:
                self._sleep(self.pacing_seconds)
            page = self._fetch(symbol, self.backfill_granularity, cursor, cursor + self.window)
            pages += 1
            if not page:
                logger.debug("backfill %s finished after %d page(s)", symbol, pages)
                return

            cursor = self._advance(cursor, page)
            trades = self._sorted(page)
            for trade in trades:
                # overlapping windows re-deliver the boundary candle
                if last_ts is not None and trade.timestamp <= last_ts:
                    continue
                yield trade
            if trades and (last_ts is None or trades[-1].timestamp > last_ts):
                last_ts = trades[-1].timestamp

    def _fetch(self, symbol, granularity, start=None, end=None):
        return self.client.get_candles(
            symbol, granularity,
            start=iso_seconds(start) if start is not None else None,
            end=iso_seconds(end) if end is not None else None,
        )

    def _advance(self, cursor, page):
        # pages are not guaranteed to be sorted; follow the first row, but
        # never let the cursor stall on the same window
        with decoding("candles"):
            first = from_unix_seconds(page[0][0])
            if first > cursor:
                return first
            newest = from_unix_seconds(max(row[0] for row in page))
        if newest > cursor:
            return newest
        logger.debug("cursor stalled at %s, skipping to end of window", cursor.isoformat())
        return cursor + self.window

    def _sorted(self, page):
        if not page:
            return []
        with decoding("candles"):
            trades = [candle_to_trade(row) for row in page]
        trades.sort(key=lambda t: t.timestamp)
        return trades


def candle_to_trade(row):
    # [time, low, high, open, close, volume]
    return Trade(amount=to_decimal(row[5]), price=to_decimal(row[3]),
                 timestamp=from_unix_seconds(row[0]), is_buyer_maker=True, id=0)
