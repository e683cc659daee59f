#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Account configuration reader.
Reads account.yaml, where every account is a protected credential bundle:

    accounts:
      gdax:
        main:
          - <base64 public key>
          - <base64 private key>
          - <base64 passphrase>
"""

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from gdaxlink.core.kernel.errors import ConfigurationError
from gdaxlink.drivers.gdax.secrets import credentials_from_protected

ACCOUNT_FILE_ENV = 'GDAX_ACCOUNT_FILE'


class AccountReader:
    """Account configuration reader"""

    def __init__(self, config_dir: str = None, account_file: str = None):
        """
        Args:
            config_dir: directory holding account.yaml, defaults to this module's directory
            account_file: explicit path, overrides config_dir and $GDAX_ACCOUNT_FILE
        """
        if config_dir is None:
            config_dir = os.path.dirname(os.path.abspath(__file__))

        self.config_dir = Path(config_dir)
        account_file = account_file or os.getenv(ACCOUNT_FILE_ENV)
        self.account_file = Path(account_file) if account_file else self.config_dir / 'account.yaml'
        self._config = None

    def _load_config(self) -> Dict[str, Any]:
        if self._config is not None:
            return self._config

        if not self.account_file.exists():
            raise ConfigurationError(f"account file not found: {self.account_file}")

        try:
            with open(self.account_file, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML error in {self.account_file}: {e}") from e
        return self._config

    def get_exchange_accounts(self, exchange: str = 'gdax') -> Dict[str, Any]:
        return self._load_config().get('accounts', {}).get(exchange, {}) or {}

    def list_accounts(self, exchange: str = 'gdax') -> List[str]:
        return list(self.get_exchange_accounts(exchange).keys())

    def get_gdax_credentials(self, account: str = 'main'):
        """
        Returns:
            Credentials built from the account's three bundle entries

        Raises:
            ConfigurationError: unknown account or a bundle without exactly three entries
        """
        accounts = self.get_exchange_accounts('gdax')
        if account not in accounts:
            raise ConfigurationError(f"gdax account '{account}' not found in {self.account_file}")
        bundle = accounts[account]
        if not isinstance(bundle, list):
            raise ConfigurationError(f"gdax account '{account}' should be a list of three entries")
        return credentials_from_protected(bundle)
