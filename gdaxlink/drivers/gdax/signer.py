# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/signer.py
"""
Request signer/authorizer for GDAX.
- HMAC-SHA256 over timestamp + METHOD + path?query + body, keyed with the
  base64-decoded API secret, result base64 encoded.
"""
import base64
import binascii
import hashlib
import hmac
import time
from decimal import Decimal

from gdaxlink.core.kernel.errors import AuthenticationPreconditionError, ConfigurationError


def format_timestamp(ts):
    """
    Seconds since epoch as a dot-decimal string.

    Built with str()/format() on numbers only, which never look at the
    process locale: 1500000000 -> '1500000000', 1500000000.25 -> '1500000000.250'.
    """
    if isinstance(ts, str):
        ts = Decimal(ts)
    if isinstance(ts, Decimal):
        if ts == ts.to_integral_value():
            return str(int(ts))
        return format(ts.quantize(Decimal('0.001')), 'f')
    if isinstance(ts, int) or float(ts).is_integer():
        return str(int(ts))
    return format(float(ts), '.3f')


class SignedRequest(object):
    """Derived per request, never stored on the client."""
    __slots__ = ('timestamp', 'method', 'path_and_query', 'body', 'signature')

    def __init__(self, timestamp, method, path_and_query, body, signature):
        self.timestamp = timestamp
        self.method = method
        self.path_and_query = path_and_query
        self.body = body
        self.signature = signature

    @property
    def prehash(self):
        return prehash(self.timestamp, self.method, self.path_and_query, self.body)


def prehash(timestamp, method, path_and_query, body=''):
    return timestamp + method.upper() + path_and_query + (body or '')


class Signer:
    def __init__(self, credentials, clock=time.time):
        self.credentials = credentials
        self._clock = clock

    def can_sign(self):
        return self.credentials is not None and self.credentials.is_complete()

    def sign(self, method, path_and_query, body='', timestamp=None):
        if not self.can_sign():
            raise AuthenticationPreconditionError("no authentication context: api key, secret or passphrase missing")
        ts = format_timestamp(self._clock() if timestamp is None else timestamp)
        message = bytearray()
        for part in (ts, method.upper(), path_and_query, body or ''):
            message += part.encode('utf-8')
        try:
            with self.credentials.private_key.reveal() as encoded:
                try:
                    key = bytearray(base64.b64decode(encoded, validate=True))
                except (binascii.Error, ValueError) as e:
                    raise ConfigurationError("api secret is not valid base64") from e
                try:
                    digest = hmac.new(key, message, hashlib.sha256).digest()
                finally:
                    key[:] = b'\x00' * len(key)
        finally:
            message[:] = b'\x00' * len(message)
        signature = base64.b64encode(digest).decode('ascii')
        return SignedRequest(ts, method.upper(), path_and_query, body or '', signature)

    def headers(self, method, path_and_query, body='', timestamp=None):
        """
        Fresh CB-ACCESS-* header set for one request; the timestamp changes
        every call so nothing here may be reused.
        """
        signed = self.sign(method, path_and_query, body, timestamp)
        return {
            "Content-Type": "application/json",
            "CB-ACCESS-KEY": self.credentials.public_key.reveal_str(),
            "CB-ACCESS-SIGN": signed.signature,
            "CB-ACCESS-TIMESTAMP": signed.timestamp,
            "CB-ACCESS-PASSPHRASE": self.credentials.passphrase.reveal_str(),
        }
