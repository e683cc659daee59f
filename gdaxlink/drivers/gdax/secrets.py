# -*- coding: utf-8 -*-
# gdaxlink/drivers/gdax/secrets.py
"""
In-memory handling of API key material.

A ``SecretValue`` keeps its bytes masked with a random pad and only hands out
plaintext inside ``with secret.reveal() as buf:``; the buffer is zeroed when
the block exits. It refuses to be printed, pickled or copied.
"""

import base64
import binascii
import os
from contextlib import contextmanager

import yaml

from gdaxlink.core.kernel.errors import ConfigurationError


class SecretValue(object):
    __slots__ = ('_pad', '_masked')

    def __init__(self, value):
        if isinstance(value, SecretValue):
            raise TypeError("SecretValue cannot wrap another SecretValue")
        raw = bytearray(value.encode('utf-8') if isinstance(value, str) else value)
        self._pad = bytearray(os.urandom(len(raw)))
        self._masked = bytearray(b ^ p for b, p in zip(raw, self._pad))
        _zero(raw)

    def __len__(self):
        if self._masked is None:
            return 0
        return len(self._masked)

    def __bool__(self):
        return len(self) > 0

    @contextmanager
    def reveal(self):
        """Yield a plaintext bytearray, zeroed on exit."""
        if self._masked is None:
            raise ValueError("secret has been wiped")
        plain = bytearray(b ^ p for b, p in zip(self._masked, self._pad))
        try:
            yield plain
        finally:
            _zero(plain)

    def reveal_str(self):
        """Plaintext as ``str`` for header values; the caller must not keep it."""
        with self.reveal() as plain:
            return plain.decode('utf-8')

    def wipe(self):
        if self._masked is not None:
            _zero(self._masked)
            _zero(self._pad)
        self._masked = None
        self._pad = None

    def __repr__(self):
        return "SecretValue('******')"

    __str__ = __repr__

    def __reduce__(self):
        raise TypeError("SecretValue is not serializable")

    def __copy__(self):
        raise TypeError("SecretValue cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("SecretValue cannot be copied")


def _zero(buf):
    for i in range(len(buf)):
        buf[i] = 0


class Credentials(object):
    """
    public key / private key / passphrase triple.

    The private key is the base64 secret issued by GDAX; it is only decoded
    while a request is being signed.
    """
    __slots__ = ('_public_key', '_private_key', '_passphrase')

    def __init__(self, public_key, private_key, passphrase):
        object.__setattr__(self, '_public_key', _as_secret(public_key))
        object.__setattr__(self, '_private_key', _as_secret(private_key))
        object.__setattr__(self, '_passphrase', _as_secret(passphrase))

    def __setattr__(self, key, value):
        raise AttributeError("Credentials are immutable")

    @property
    def public_key(self):
        return self._public_key

    @property
    def private_key(self):
        return self._private_key

    @property
    def passphrase(self):
        return self._passphrase

    def is_complete(self):
        return bool(self._public_key) and bool(self._private_key) and bool(self._passphrase)

    @classmethod
    def from_bundle(cls, entries):
        entries = list(entries or [])
        if len(entries) != 3:
            raise ConfigurationError(
                "credential bundle should have a public key, a private key and a passphrase "
                "(got %d entries)" % len(entries))
        return cls(entries[0], entries[1], entries[2])

    def wipe(self):
        for secret in (self._public_key, self._private_key, self._passphrase):
            if secret is not None:
                secret.wipe()

    def __repr__(self):
        return "Credentials(complete=%s)" % self.is_complete()

    def __reduce__(self):
        raise TypeError("Credentials are not serializable")


def _as_secret(value):
    if value is None:
        return None
    if isinstance(value, SecretValue):
        return value
    return SecretValue(value)


def unprotect(entry):
    """Bundle entries are stored base64 wrapped; return the raw bytes."""
    try:
        return bytearray(base64.b64decode(str(entry).strip(), validate=True))
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError("credential bundle entry is not valid base64") from e


def load_credentials_bundle(path):
    """
    Load a protected bundle file: a YAML list of exactly three base64 entries
    (public key, private key, passphrase).
    """
    if not os.path.exists(path):
        raise ConfigurationError("credential bundle not found: %s" % path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            entries = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError("credential bundle %s is not valid YAML" % path) from e
    if not isinstance(entries, list):
        raise ConfigurationError("credential bundle %s should be a list" % path)
    return credentials_from_protected(entries)


def credentials_from_protected(entries):
    if entries is None or len(entries) != 3:
        # checked before unwrapping so nothing is decoded for a bad bundle
        return Credentials.from_bundle(entries)
    secrets = []
    for entry in entries:
        plain = unprotect(entry)
        secrets.append(SecretValue(plain))
        _zero(plain)
    return Credentials.from_bundle(secrets)
