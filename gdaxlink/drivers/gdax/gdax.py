# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/gdax.py
"""GDAX REST API client: raw JSON in, raw JSON out."""

import logging
from urllib.parse import quote

from gdaxlink.drivers.gdax.signer import Signer
from gdaxlink.drivers.gdax.transport import RequestsTransport
from gdaxlink.drivers.gdax.util import decode_json, encode_payload

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://api.gdax.com"


class GdaxSpot:
    """
    GDAX REST API client.

    ``cursor_after`` / ``cursor_before`` are overwritten from the CB-AFTER /
    CB-BEFORE headers of every response, whichever endpoint produced it.
    "after" points at an older page, "before" at a newer one. They are plain
    attributes with one writer (``request``): calls on one instance must not
    overlap.
    """

    def __init__(self, credentials=None, host=None, transport=None, timeout=10):
        self._host = (host or DEFAULT_HOST).rstrip('/')
        self._signer = Signer(credentials)
        self._transport = transport or RequestsTransport(timeout=timeout)
        self.cursor_after = None
        self.cursor_before = None

    @property
    def can_authenticate(self):
        return self._signer.can_sign()

    def request(self, method, uri, params=None, body=None, auth=False):
        """Initiate network request
       @param method: request method, GET / POST / DELETE
       @param uri: request path, e.g. /products
       @param params: dict, request query params (list values repeat the key)
       @param body: dict, request body
       @param auth: boolean, sign the request
       @return: decoded JSON (Decimal for non-integers) or None for an empty body
       """
        method = method.upper()
        if not uri.startswith('/'):
            uri = '/' + uri
        if params:
            uri += "?" + _query_string(params)
        payload = encode_payload(body)

        if auth:
            headers = self._signer.headers(method, uri, payload)
        else:
            headers = {"Content-Type": "application/json"}

        logger.debug("%s %s", method, uri)
        _, resp_headers, text = self._transport.send(method, self._host + uri, headers, payload)
        self._update_cursors(resp_headers)
        return decode_json(text)

    def _update_cursors(self, headers):
        headers = {str(k).lower(): v for k, v in (headers or {}).items()}
        self.cursor_after = headers.get('cb-after')
        self.cursor_before = headers.get('cb-before')

    # -------------- public --------------
    def get_products(self):
        return self.request("GET", "/products")

    def get_ticker(self, symbol):
        return self.request("GET", "/products/%s/ticker" % symbol)

    def get_orderbook(self, symbol, level=2):
        return self.request("GET", "/products/%s/book" % symbol, params={"level": level})

    def get_trades(self, symbol):
        return self.request("GET", "/products/%s/trades" % symbol)

    def get_candles(self, symbol, granularity, start=None, end=None):
        """
        Rows come back as [time, low, high, open, close, volume], usually
        newest first.
        """
        params = {"granularity": granularity}
        if start is not None:
            params["start"] = start
        if end is not None:
            params["end"] = end
        return self.request("GET", "/products/%s/candles" % symbol, params=params)

    # -------------- private --------------
    def get_accounts(self):
        return self.request("GET", "/accounts", auth=True)

    def place_order(self, symbol, side, price, size, order_type='limit', time_in_force='GTC'):
        data = {
            "type": order_type,
            "side": side,
            "product_id": symbol,
            "price": price,
            "size": size,
            "time_in_force": time_in_force,
        }
        return self.request("POST", "/orders", body=data, auth=True)

    def get_order(self, order_id):
        return self.request("GET", "/orders/%s" % order_id, auth=True)

    def get_orders(self, symbol=None, status=None):
        params = {}
        if symbol:
            params["product_id"] = symbol
        if status:
            params["status"] = status
        return self.request("GET", "/orders", params=params or None, auth=True)

    def cancel_order(self, order_id):
        return self.request("DELETE", "/orders/%s" % order_id, auth=True)


def _query_string(params):
    parts = []
    for k in params:
        values = params[k] if isinstance(params[k], (list, tuple)) else [params[k]]
        for v in values:
            parts.append("{}={}".format(quote(str(k), safe=''), quote(str(v), safe='')))
    return "&".join(parts)
