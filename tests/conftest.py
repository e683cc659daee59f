# -*- coding: utf-8 -*-
# tests/conftest.py

import base64
import json

import pytest

from gdaxlink.configs.config_reader import ConfigReader
from gdaxlink.drivers.gdax.driver import GdaxDriver
from gdaxlink.drivers.gdax.gdax import GdaxSpot
from gdaxlink.drivers.gdax.secrets import Credentials

SECRET = b"test-secret-key-bytes"
PRIVATE_KEY = base64.b64encode(SECRET).decode('ascii')


class FakeTransport(object):
    """
    Scripted stand-in for RequestsTransport.

    Each queued response is a body (dict/list/None -> JSON text), a
    (body, headers) tuple, or an exception instance to raise.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, body=None, headers=None):
        self.responses.append((body, headers or {}))

    def send(self, method, url, headers=None, body=None):
        self.calls.append({'method': method, 'url': url, 'headers': dict(headers or {}), 'body': body})
        if not self.responses:
            raise AssertionError("unexpected request: %s %s" % (method, url))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, tuple):
            body, resp_headers = resp
        else:
            body, resp_headers = resp, {}
        text = body if isinstance(body, str) else ('' if body is None else json.dumps(body))
        return 200, resp_headers, text


@pytest.fixture
def credentials():
    return Credentials("test-public-key", PRIVATE_KEY, "test-passphrase")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(credentials, transport):
    return GdaxSpot(credentials=credentials, host="https://api.example.test", transport=transport)


@pytest.fixture
def config_reader(tmp_path):
    (tmp_path / 'gdax.yaml').write_text(
        "gdax:\n"
        "  base_url: https://api.example.test\n"
        "  request_pacing_seconds: 0.5\n",
        encoding='utf-8',
    )
    return ConfigReader(config_dir=str(tmp_path))


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def driver(client, config_reader, sleeps):
    return GdaxDriver(gdax_client=client, config_reader=config_reader, sleep=sleeps.append)
