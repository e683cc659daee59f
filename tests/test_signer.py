# -*- coding: utf-8 -*-
# tests/test_signer.py

import base64
import hashlib
import hmac
import json
import locale
from decimal import Decimal

import pytest

from gdaxlink.core.kernel.errors import AuthenticationPreconditionError
from gdaxlink.drivers.gdax.secrets import Credentials
from gdaxlink.drivers.gdax.signer import Signer, format_timestamp, prehash
from gdaxlink.drivers.gdax.util import encode_payload

from conftest import PRIVATE_KEY, SECRET


def _expected(message):
    return base64.b64encode(hmac.new(SECRET, message.encode('utf-8'), hashlib.sha256).digest()).decode()


def test_signature_matches_hmac_sha256_of_prehash(credentials):
    body = '{"size":"1.0","price":"100.5"}'
    signed = Signer(credentials).sign('post', '/orders', body, timestamp=1500000000.25)

    assert signed.timestamp == '1500000000.250'
    assert signed.method == 'POST'
    assert signed.prehash == '1500000000.250POST/orders' + body
    assert signed.signature == _expected('1500000000.250POST/orders' + body)


def test_signing_is_deterministic(credentials):
    signer = Signer(credentials)
    a = signer.sign('GET', '/accounts', '', timestamp=1500000000)
    b = signer.sign('GET', '/accounts', '', timestamp=1500000000)
    assert a.signature == b.signature


@pytest.mark.parametrize("change", [
    dict(method='POST'),
    dict(path='/orders?status=open'),
    dict(body='{"a":1}'),
    dict(timestamp=1500000001),
])
def test_changing_any_input_changes_signature(credentials, change):
    base = dict(method='GET', path='/orders', body='', timestamp=1500000000)
    signer = Signer(credentials)
    original = signer.sign(base['method'], base['path'], base['body'], base['timestamp'])
    base.update(change)
    changed = signer.sign(base['method'], base['path'], base['body'], base['timestamp'])
    assert changed.signature != original.signature


def test_different_secret_changes_signature(credentials):
    other = Credentials("test-public-key", base64.b64encode(b"another-secret").decode(), "test-passphrase")
    a = Signer(credentials).sign('GET', '/accounts', '', 1500000000)
    b = Signer(other).sign('GET', '/accounts', '', 1500000000)
    assert a.signature != b.signature


@pytest.mark.parametrize("ts, expected", [
    (1500000000, '1500000000'),
    (1500000000.0, '1500000000'),
    (1500000000.5, '1500000000.500'),
    (Decimal('1500000000.123'), '1500000000.123'),
    ('1500000000.25', '1500000000.250'),
])
def test_format_timestamp(ts, expected):
    assert format_timestamp(ts) == expected


def test_timestamp_has_no_comma_under_comma_locale(credentials):
    previous = locale.setlocale(locale.LC_NUMERIC)
    for name in ('de_DE.UTF-8', 'fr_FR.UTF-8', 'de_DE', 'fr_FR'):
        try:
            locale.setlocale(locale.LC_NUMERIC, name)
            break
        except locale.Error:
            continue
    try:
        for ts in (1500000000.5, 1234567890.125, Decimal('1.5')):
            assert ',' not in format_timestamp(ts)
        headers = Signer(credentials).headers('GET', '/accounts', '', timestamp=1500000000.75)
        assert headers['CB-ACCESS-TIMESTAMP'] == '1500000000.750'
    finally:
        locale.setlocale(locale.LC_NUMERIC, previous)


def test_headers_carry_key_signature_timestamp_passphrase(credentials):
    headers = Signer(credentials).headers('GET', '/accounts', '', timestamp=1500000000)
    assert headers['CB-ACCESS-KEY'] == 'test-public-key'
    assert headers['CB-ACCESS-PASSPHRASE'] == 'test-passphrase'
    assert headers['CB-ACCESS-TIMESTAMP'] == '1500000000'
    assert headers['CB-ACCESS-SIGN'] == _expected('1500000000GET/accounts')


def test_headers_use_clock_per_call(credentials):
    ticks = iter([1500000000, 1500000001])
    signer = Signer(credentials, clock=lambda: next(ticks))
    first = signer.headers('GET', '/accounts')
    second = signer.headers('GET', '/accounts')
    assert first['CB-ACCESS-TIMESTAMP'] != second['CB-ACCESS-TIMESTAMP']
    assert first['CB-ACCESS-SIGN'] != second['CB-ACCESS-SIGN']


@pytest.mark.parametrize("creds", [
    None,
    Credentials("key", PRIVATE_KEY, None),
    Credentials("key", "", "pass"),
    Credentials(None, PRIVATE_KEY, "pass"),
])
def test_missing_key_material_refuses_to_sign(creds):
    signer = Signer(creds)
    assert not signer.can_sign()
    with pytest.raises(AuthenticationPreconditionError):
        signer.headers('GET', '/accounts')


def test_prehash_round_trip_recovers_method_path_body():
    payload = {"type": "limit", "side": "buy", "product_id": "BTC-USD", "price": "100.5", "size": "0.01"}
    body = encode_payload(payload)
    ts = format_timestamp(1500000000.5)
    message = prehash(ts, 'post', '/orders', body)

    assert message.startswith(ts)
    rest = message[len(ts):]
    assert rest.startswith('POST')
    rest = rest[len('POST'):]
    assert rest.startswith('/orders')
    assert json.loads(rest[len('/orders'):]) == payload


def test_prehash_without_body():
    assert prehash('1', 'delete', '/orders/abc') == '1DELETE/orders/abc'


def test_key_and_message_buffers_are_zeroed_after_signing(credentials, monkeypatch):
    seen = []
    real_new = hmac.new

    def capture(key, msg, digestmod):
        seen.append((key, msg))
        return real_new(bytes(key), bytes(msg), digestmod)

    monkeypatch.setattr(hmac, 'new', capture)
    signed = Signer(credentials).sign('GET', '/accounts', timestamp=1500000000)

    key, msg = seen[0]
    assert isinstance(key, bytearray) and isinstance(msg, bytearray)
    assert not any(key) and not any(msg)
    expected = base64.b64encode(
        real_new(SECRET, b'1500000000GET/accounts', hashlib.sha256).digest()).decode()
    assert signed.signature == expected
