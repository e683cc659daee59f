# -*- coding: utf-8 -*-
# gdaxlink/core/kernel/errors.py
"""
Exceptions raised by the driver layer.

Every failure surfaces as one of these; nothing here retries.
"""


class GdaxError(Exception):
    """Base error of the connector."""


class ConfigurationError(GdaxError):
    """Malformed or incomplete configuration / credential bundle."""


class AuthenticationPreconditionError(GdaxError):
    """Key material missing: a privileged request was not sent."""


class TransportError(GdaxError):
    """Network or HTTP level failure."""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(GdaxError):
    """Response did not have the expected JSON shape."""
