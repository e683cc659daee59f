# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/driver.py
# GDAX driver: wraps GdaxSpot and turns raw JSON into gdaxlink.core.models objects.

import itertools
import logging
from datetime import timedelta
from decimal import Decimal

from gdaxlink.configs.account_reader import AccountReader
from gdaxlink.configs.config_reader import ConfigReader
from gdaxlink.core.kernel.syscalls import TradingSyscalls
from gdaxlink.core.models import OrderBook, OrderBookLevel, OrderLifecycle, OrderResult, Ticker, Trade
from gdaxlink.drivers.gdax.gdax import GdaxSpot
from gdaxlink.drivers.gdax.history import HistoryWalker
from gdaxlink.drivers.gdax.util import decimal_str, decoding, parse_time, to_decimal, trades_to_frame
from gdaxlink.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def init_GdaxClient(account='main', config_reader=None, account_reader=None, transport=None, auth=True):
    """
    Build a GdaxSpot client from gdax.yaml and account.yaml.

    Args:
        account: account name under accounts.gdax in account.yaml
        auth: False for a public-only client (no account file needed)

    Raises:
        ConfigurationError: account missing or its bundle is not three entries;
                            raised before any request is made
    """
    config_reader = config_reader or ConfigReader()
    cfg = config_reader.get_gdax_config()
    credentials = None
    if auth:
        credentials = (account_reader or AccountReader()).get_gdax_credentials(account)
    return GdaxSpot(credentials=credentials, host=cfg['base_url'], transport=transport, timeout=cfg['timeout'])


def normalize_symbol(symbol):
    """'btc_usd' -> 'BTC-USD'"""
    if symbol is None:
        return None
    return str(symbol).replace('_', '-').upper()


def order_lifecycle(status, amount, amount_filled):
    """
    Exchange status -> OrderLifecycle.

    'open'/'active' are also reported for orders that are fully or partly
    executed but not settled, so those two are decided by the fill amounts.
    """
    if status == 'pending':
        return OrderLifecycle.PENDING
    if status in ('active', 'open'):
        if amount == amount_filled:
            return OrderLifecycle.FILLED
        if amount_filled > 0:
            return OrderLifecycle.PARTIALLY_FILLED
        return OrderLifecycle.PENDING
    if status in ('done', 'settled'):
        return OrderLifecycle.FILLED
    if status in ('cancelled', 'canceled'):
        return OrderLifecycle.CANCELED
    return OrderLifecycle.UNKNOWN


def parse_order(od):
    with decoding("order"):
        amount = to_decimal(od['size'])
        filled = to_decimal(od['filled_size'])
        executed = to_decimal(od.get('executed_value') or 0)
        status = od.get('status')
        result = OrderResult(
            order_id=od['id'],
            symbol=od.get('product_id'),
            side=str(od['side']).lower(),
            amount=amount,
            amount_filled=filled,
            average_price=(executed / filled) if filled > 0 else Decimal(0),
            created_at=parse_time(od['created_at']) if od.get('created_at') else None,
            status=order_lifecycle(status, amount, filled),
            price=to_decimal(od['price']) if od.get('price') not in (None, '') else None,
            executed_value=executed,
            raw_status=status,
        )
    if result.status is OrderLifecycle.UNKNOWN:
        logger.warning("order %s has unrecognized status %r", result.order_id, status)
    return result


class GdaxDriver(TradingSyscalls):
    """
    GDAX spot driver exposing the TradingSyscalls surface.

    Not safe for concurrent use: the underlying client keeps the pagination
    cursors of the last response.
    """

    def __init__(self, gdax_client=None, account='main', config_reader=None, sleep=None, auth=True):
        """
        :param auth: False builds a public-only client that needs no account file
        """
        self.cex = 'GDAX'
        config_reader = config_reader or ConfigReader()
        self.config = config_reader.get_gdax_config()
        log_cfg = config_reader.get_logging_config()
        setup_logger('gdaxlink', log_cfg['level'], log_cfg['log_dir'])

        if gdax_client is None:
            gdax_client = init_GdaxClient(account=account, config_reader=config_reader, auth=auth)
            logger.info("GDAX driver initialized (account: %s, auth: %s)", account, auth)
        self.gdax = gdax_client

        walker_kwargs = dict(
            recent_granularity=self.config['recent_granularity'],
            backfill_granularity=self.config['backfill_granularity'],
            window=timedelta(minutes=self.config['backfill_window_minutes']),
            pacing_seconds=self.config['request_pacing_seconds'],
        )
        if sleep is not None:
            walker_kwargs['sleep'] = sleep
        self.history = HistoryWalker(self.gdax, **walker_kwargs)

    @property
    def cursor_after(self):
        return self.gdax.cursor_after

    @property
    def cursor_before(self):
        return self.gdax.cursor_before

    # -------------- ref-data / meta --------------
    def symbols(self):
        raw = self.gdax.get_products()
        with decoding("products"):
            return [p['id'] for p in raw]

    # -------------- market data --------------
    def get_ticker(self, symbol):
        full = normalize_symbol(symbol)
        raw = self.gdax.get_ticker(full)
        with decoding("ticker"):
            return Ticker(
                symbol=full,
                bid=to_decimal(raw['bid']),
                ask=to_decimal(raw['ask']),
                last=to_decimal(raw['price']),
                volume=to_decimal(raw['volume']),
                timestamp=parse_time(raw['time']),
            )

    def get_orderbook(self, symbol, level=50):
        full = normalize_symbol(symbol)
        raw = self.gdax.get_orderbook(full, self.config['order_book_level'])
        book = OrderBook(full)
        with decoding("book"):
            # kept in exchange order: asks ascending, bids descending
            for ask in itertools.islice(raw['asks'], int(level)):
                book.asks.append(OrderBookLevel(price=to_decimal(ask[0]), amount=to_decimal(ask[1])))
            for bid in itertools.islice(raw['bids'], int(level)):
                book.bids.append(OrderBookLevel(price=to_decimal(bid[0]), amount=to_decimal(bid[1])))
        return book

    def get_recent_trades(self, symbol):
        full = normalize_symbol(symbol)
        raw = self.gdax.get_trades(full)
        with decoding("trades"):
            return [
                Trade(
                    amount=to_decimal(t['size']),
                    price=to_decimal(t['price']),
                    timestamp=parse_time(t['time']),
                    is_buyer_maker=t['side'] == 'buy',
                    id=int(t['trade_id']),
                )
                for t in raw
            ]

    def stream_historical_trades(self, symbol, since=None):
        return self.history.iter_trades(normalize_symbol(symbol), since)

    def get_trades_frame(self, symbol, since=None, limit=None):
        """
        Historical trades as a DataFrame: ['ts', 'price', 'amount', 'is_buyer_maker', 'id'].
        :param limit: stop after this many trades (the walk is otherwise unbounded)
        """
        trades = self.stream_historical_trades(symbol, since)
        if limit is not None:
            trades = itertools.islice(trades, int(limit))
        return trades_to_frame(trades)

    # -------------- trading --------------
    def place_limit_order(self, symbol, size, price, is_buy):
        full = normalize_symbol(symbol)
        raw = self.gdax.place_order(
            symbol=full,
            side='buy' if is_buy else 'sell',
            price=decimal_str(price),
            size=decimal_str(size),
        )
        order = parse_order(raw)
        logger.info("placed %s %s %s @ %s -> %s", order.side, full, size, price, order.order_id)
        return order

    def revoke_order(self, order_id):
        self.gdax.cancel_order(order_id)
        logger.info("cancelled order %s", order_id)

    def get_order_status(self, order_id):
        return parse_order(self.gdax.get_order(order_id))

    def get_open_orders(self, symbol=None):
        raw = self.gdax.get_orders(normalize_symbol(symbol) if symbol else None)
        if raw is None:
            return []
        return [parse_order(od) for od in raw]

    # -------------- account --------------
    def fetch_balance(self):
        raw = self.gdax.get_accounts()
        with decoding("accounts"):
            return {acc['currency']: to_decimal(acc['available']) for acc in raw}
