# -*- coding: utf-8 -*-
# gdaxlink/core/models.py
"""
Value objects returned by the drivers.

Plain classes, built from a single response and owned by the caller
afterwards. ``to_dict()`` gives the flat dict shape the runtime layers
(and pandas) consume.
"""

from enum import Enum


class OrderLifecycle(Enum):
    """Normalized order execution progress"""
    PENDING = "pending"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    CANCELED = "canceled"
    UNKNOWN = "unknown"


class OrderResult(object):
    __slots__ = ('order_id', 'symbol', 'side', 'amount', 'amount_filled', 'price',
                 'average_price', 'executed_value', 'created_at', 'status', 'raw_status')

    def __init__(self, order_id, symbol, side, amount, amount_filled, average_price,
                 created_at, status, price=None, executed_value=None, raw_status=None):
        self.order_id = order_id
        self.symbol = symbol
        self.side = side
        self.amount = amount
        self.amount_filled = amount_filled
        self.price = price
        self.average_price = average_price
        self.executed_value = executed_value
        self.created_at = created_at
        self.status = status
        self.raw_status = raw_status

    @property
    def is_buy(self):
        return self.side == 'buy'

    def to_dict(self):
        return {
            'orderId': self.order_id,
            'symbol': self.symbol,
            'side': self.side,
            'quantity': self.amount,
            'filledQuantity': self.amount_filled,
            'price': self.price,
            'averagePrice': self.average_price,
            'executedValue': self.executed_value,
            'createdAt': self.created_at,
            'status': self.status.value,
            'rawStatus': self.raw_status,
        }

    def __repr__(self):
        return "OrderResult(%s %s %s %s/%s %s)" % (
            self.order_id, self.symbol, self.side, self.amount_filled, self.amount, self.status.name)


class Trade(object):
    """
    A single trade. ``id`` is 0 when the source endpoint does not assign one
    (candle-derived trades).
    """
    __slots__ = ('amount', 'price', 'timestamp', 'is_buyer_maker', 'id')

    def __init__(self, amount, price, timestamp, is_buyer_maker, id=0):
        self.amount = amount
        self.price = price
        self.timestamp = timestamp
        self.is_buyer_maker = is_buyer_maker
        self.id = id

    def to_dict(self):
        return {
            'id': self.id,
            'ts': self.timestamp,
            'price': self.price,
            'amount': self.amount,
            'is_buyer_maker': self.is_buyer_maker,
        }

    def __eq__(self, other):
        if not isinstance(other, Trade):
            return NotImplemented
        return (self.amount, self.price, self.timestamp, self.is_buyer_maker, self.id) == \
               (other.amount, other.price, other.timestamp, other.is_buyer_maker, other.id)

    def __repr__(self):
        return "Trade(%s @ %s, ts=%s, id=%s)" % (self.amount, self.price, self.timestamp.isoformat(), self.id)


class OrderBookLevel(object):
    __slots__ = ('price', 'amount')

    def __init__(self, price, amount):
        self.price = price
        self.amount = amount

    def __repr__(self):
        return "OrderBookLevel(%s x %s)" % (self.price, self.amount)


class OrderBook(object):
    """Full snapshot: asks ascending, bids descending, in the order the exchange gave them."""

    def __init__(self, symbol, asks=None, bids=None):
        self.symbol = symbol
        self.asks = asks if asks is not None else []
        self.bids = bids if bids is not None else []

    def to_dict(self):
        return {
            'symbol': self.symbol,
            'asks': [[lv.price, lv.amount] for lv in self.asks],
            'bids': [[lv.price, lv.amount] for lv in self.bids],
        }


class Ticker(object):
    __slots__ = ('symbol', 'bid', 'ask', 'last', 'volume', 'timestamp')

    def __init__(self, symbol, bid, ask, last, volume, timestamp):
        self.symbol = symbol
        self.bid = bid
        self.ask = ask
        self.last = last
        self.volume = volume
        self.timestamp = timestamp

    def to_dict(self):
        return {
            'symbol': self.symbol,
            'bid': self.bid,
            'ask': self.ask,
            'last': self.last,
            'volume': self.volume,
            'ts': self.timestamp,
        }
