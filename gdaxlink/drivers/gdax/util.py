# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/util.py
import json
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

import pandas as pd

from gdaxlink.core.kernel.errors import DecodeError


def encode_payload(payload):
    """Compact JSON, identical bytes for the wire body and the string to sign."""
    if not payload:
        return ''
    return json.dumps(payload, separators=(',', ':'), default=_json_default)


def _json_default(o):
    if isinstance(o, Decimal):
        return str(o)
    raise TypeError("Object of type %s is not JSON serializable" % type(o).__name__)


def decode_json(text):
    if text is None or text == '':
        return None
    try:
        return json.loads(text, parse_float=Decimal)
    except ValueError as e:
        raise DecodeError("response is not valid JSON: %s" % e) from e


@contextmanager
def decoding(what):
    """Turn lookups/conversions failing on a response into DecodeError."""
    try:
        yield
    except (KeyError, IndexError, TypeError, ValueError, InvalidOperation, AttributeError) as e:
        raise DecodeError("unexpected %s response: %r" % (what, e)) from e


def to_decimal(v):
    if isinstance(v, Decimal):
        return v
    if isinstance(v, float):
        return Decimal(repr(v))
    if v is None or v == '':
        raise ValueError("missing numeric value")
    return Decimal(str(v))


def decimal_str(v):
    """Plain invariant decimal string for the wire ('0.01', never '1E-2')."""
    return format(to_decimal(v), 'f')


def parse_time(v):
    """ISO8601 string (GDAX uses microsecond 'Z' stamps) -> aware UTC datetime."""
    if isinstance(v, datetime):
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)
    if v is None or v == '':
        raise ValueError("missing timestamp")
    ts = pd.Timestamp(v)
    ts = ts.tz_localize('UTC') if ts.tzinfo is None else ts.tz_convert('UTC')
    return ts.to_pydatetime()


def from_unix_seconds(v):
    return datetime.fromtimestamp(float(v), tz=timezone.utc)


def to_unix_seconds(dt):
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def iso_seconds(dt):
    """'s' sortable format the candles endpoint takes for start/end."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.strftime('%Y-%m-%dT%H:%M:%S')


def trades_to_frame(trades):
    """
    Collect trades into a DataFrame ordered by ts:
    columns ['ts', 'price', 'amount', 'is_buyer_maker', 'id'].
    """
    columns = ['ts', 'price', 'amount', 'is_buyer_maker', 'id']
    rows = [t.to_dict() for t in trades]
    if not rows:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame.from_records(rows, columns=columns)
    df['ts'] = pd.to_datetime(df['ts'], utc=True)
    df['price'] = pd.to_numeric(df['price'].map(float))
    df['amount'] = pd.to_numeric(df['amount'].map(float))
    return df.sort_values('ts', kind='stable').reset_index(drop=True)
