# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/__init__.py
# GDAX driver package

from .driver import GdaxDriver, init_GdaxClient, parse_order
from .gdax import GdaxSpot
from .history import HistoryWalker
from .secrets import Credentials, SecretValue, load_credentials_bundle
from .signer import Signer

__all__ = [
    'GdaxDriver',
    'GdaxSpot',
    'init_GdaxClient',
    'parse_order',
    'HistoryWalker',
    'Credentials',
    'SecretValue',
    'load_credentials_bundle',
    'Signer',
]
