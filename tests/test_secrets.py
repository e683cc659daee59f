# -*- coding: utf-8 -*-
# tests/test_secrets.py

import base64
import copy
import pickle

import pytest

from gdaxlink.configs.account_reader import AccountReader
from gdaxlink.core.kernel.errors import ConfigurationError
from gdaxlink.drivers.gdax.driver import init_GdaxClient
from gdaxlink.drivers.gdax.secrets import Credentials, SecretValue, load_credentials_bundle


def _b64(s):
    return base64.b64encode(s.encode('utf-8')).decode('ascii')


def test_secret_is_masked_in_repr_and_str():
    secret = SecretValue("hunter2")
    assert "hunter2" not in repr(secret)
    assert "hunter2" not in str(secret)
    assert "hunter2" not in "%s %r" % (secret, Credentials("a", "hunter2", "c"))


def test_reveal_yields_plaintext_and_wipes_buffer():
    secret = SecretValue("hunter2")
    with secret.reveal() as plain:
        assert bytes(plain) == b"hunter2"
        held = plain
    assert held == bytearray(len("hunter2"))


def test_reveal_twice_gives_same_value():
    secret = SecretValue(b"abc")
    assert secret.reveal_str() == "abc"
    assert secret.reveal_str() == "abc"


def test_wiped_secret_cannot_be_revealed():
    secret = SecretValue("x")
    secret.wipe()
    with pytest.raises(ValueError):
        with secret.reveal():
            pass


def test_secrets_and_credentials_refuse_serialization():
    secret = SecretValue("hunter2")
    with pytest.raises(TypeError):
        pickle.dumps(secret)
    with pytest.raises(TypeError):
        copy.deepcopy(secret)
    with pytest.raises(TypeError):
        pickle.dumps(Credentials("a", "b", "c"))


def test_credentials_are_immutable():
    creds = Credentials("a", "b", "c")
    with pytest.raises(AttributeError):
        creds.passphrase = SecretValue("d")


def test_bundle_needs_exactly_three_entries():
    assert Credentials.from_bundle(["a", "b", "c"]).is_complete()
    with pytest.raises(ConfigurationError):
        Credentials.from_bundle(["a", "b"])
    with pytest.raises(ConfigurationError):
        Credentials.from_bundle(["a", "b", "c", "d"])


def test_load_credentials_bundle(tmp_path):
    path = tmp_path / "bundle.yaml"
    path.write_text("- %s\n- %s\n- %s\n" % (_b64("pub"), _b64("cHJpdg=="), _b64("pass")), encoding='utf-8')
    creds = load_credentials_bundle(str(path))
    assert creds.public_key.reveal_str() == "pub"
    assert creds.private_key.reveal_str() == "cHJpdg=="
    assert creds.passphrase.reveal_str() == "pass"


def test_load_credentials_bundle_with_two_entries(tmp_path):
    path = tmp_path / "bundle.yaml"
    path.write_text("- %s\n- %s\n" % (_b64("pub"), _b64("priv")), encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_credentials_bundle(str(path))


def test_bundle_entry_must_be_base64(tmp_path):
    path = tmp_path / "bundle.yaml"
    path.write_text("- '***'\n- a\n- b\n", encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_credentials_bundle(str(path))


def test_two_entry_account_fails_before_any_request(tmp_path, transport, config_reader):
    account_file = tmp_path / "account.yaml"
    account_file.write_text(
        "accounts:\n  gdax:\n    main:\n      - %s\n      - %s\n" % (_b64("pub"), _b64("priv")),
        encoding='utf-8',
    )
    with pytest.raises(ConfigurationError):
        init_GdaxClient(config_reader=config_reader,
                        account_reader=AccountReader(account_file=str(account_file)),
                        transport=transport)
    assert transport.calls == []


def test_account_reader_reads_named_account(tmp_path):
    account_file = tmp_path / "account.yaml"
    account_file.write_text(
        "accounts:\n  gdax:\n    main:\n      - %s\n      - %s\n      - %s\n" % (_b64("pub"), _b64("priv"), _b64("pass")),
        encoding='utf-8',
    )
    reader = AccountReader(account_file=str(account_file))
    assert reader.list_accounts() == ['main']
    assert reader.get_gdax_credentials('main').is_complete()
    with pytest.raises(ConfigurationError):
        reader.get_gdax_credentials('sub1')


def test_account_file_from_environment(tmp_path, monkeypatch):
    account_file = tmp_path / "elsewhere.yaml"
    account_file.write_text("accounts: {}\n", encoding='utf-8')
    monkeypatch.setenv('GDAX_ACCOUNT_FILE', str(account_file))
    assert AccountReader().account_file == account_file


def test_missing_account_file(tmp_path):
    with pytest.raises(ConfigurationError):
        AccountReader(config_dir=str(tmp_path)).get_gdax_credentials()
