# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/transport.py
"""
HTTP transport for the GDAX client: one blocking round trip per call.

Connection pooling, TLS and timeouts are left to requests; there are no
retries here or anywhere above.
"""

import logging

import requests

from gdaxlink.core.kernel.errors import TransportError

logger = logging.getLogger(__name__)


class RequestsTransport(object):
    def __init__(self, timeout=10, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, method, url, headers=None, body=None):
        """
        :return: (status_code, headers, text)
        :raises TransportError: network failure or HTTP status >= 400
        """
        try:
            resp = self.session.request(method, url, data=body or None, headers=headers or {}, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError("%s %s failed: %s" % (method, url, e)) from e
        if resp.status_code >= 400:
            logger.warning("%s %s -> HTTP %s", method, url, resp.status_code)
            raise TransportError("%s %s returned HTTP %s: %s" % (method, url, resp.status_code, resp.text),
                                 status_code=resp.status_code, body=resp.text)
        return resp.status_code, resp.headers, resp.text

    def close(self):
        self.session.close()
