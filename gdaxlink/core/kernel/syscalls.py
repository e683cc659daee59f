# -*- coding: utf-8 -*-
# gdaxlink/core/kernel/syscalls.py
# Minimal syscall interface every exchange driver implements.
# Plain base class with NotImplementedError; drivers return gdaxlink.core.models objects.

class TradingSyscalls(object):
    # ---- Ref-data / meta ----
    def symbols(self):
        """Return a list of exchange symbols, e.g. ['BTC-USD', 'ETH-USD']"""
        raise NotImplementedError

    # ---- Market data ----
    def get_ticker(self, symbol):
        """Return a Ticker (bid/ask/last/volume)"""
        raise NotImplementedError

    def get_price_now(self, symbol):
        """Return last price (float)"""
        return float(self.get_ticker(symbol).last)

    def get_orderbook(self, symbol, level=50):
        """Return an OrderBook snapshot, at most `level` entries per side"""
        raise NotImplementedError

    def get_recent_trades(self, symbol):
        """Return a list of the most recent Trades"""
        raise NotImplementedError

    def stream_historical_trades(self, symbol, since=None):
        """Return a lazy, time-ordered iterator of Trades
           :param symbol: Trading pair symbol
           :param since: Start datetime (optional). Without it only the most recent page is returned
        """
        raise NotImplementedError

    # ---- Trading ----
    def place_limit_order(self, symbol, size, price, is_buy):
        """Place a good-til-cancelled limit order, return OrderResult
           :param symbol: Trading pair symbol
           :param size: Order quantity
           :param price: Limit price
           :param is_buy: True to buy, False to sell
        """
        raise NotImplementedError

    def revoke_order(self, order_id):
        """Cancel a single order
           :param order_id: Order ID to cancel
        """
        raise NotImplementedError

    def get_open_orders(self, symbol=None):
        """Return a list of OrderResult for orders still working
           :param symbol: Trading pair symbol (optional, None for all)
        """
        raise NotImplementedError

    def get_order_status(self, order_id):
        """Return OrderResult for one order
           :param order_id: Order ID to query
        """
        raise NotImplementedError

    # ---- Account ----
    def fetch_balance(self):
        """Return dict {currency: available amount}"""
        raise NotImplementedError

    # ---- Convenience methods ----
    def buy(self, symbol, size, price):
        """Convenience method for placing buy limit orders"""
        return self.place_limit_order(symbol, size, price, True)

    def sell(self, symbol, size, price):
        """Convenience method for placing sell limit orders"""
        return self.place_limit_order(symbol, size, price, False)
