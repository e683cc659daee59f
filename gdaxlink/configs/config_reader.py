#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration reader.
Reads the YAML files next to this module (or from a given directory) and
fills in defaults for anything missing.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from gdaxlink.core.kernel.errors import ConfigurationError

DEFAULT_CONFIG = {
    'gdax': {
        'base_url': 'https://api.gdax.com',
        'timeout': 10,
        'request_pacing_seconds': 1.0,
        'backfill_window_minutes': 5,
        'recent_granularity': 1800,
        'backfill_granularity': 60,
        'order_book_level': 2,
    },
    'logging': {
        'level': 'INFO',
        'log_dir': None,
    },
}


class ConfigReader:
    """Configuration file reader"""

    def __init__(self, config_dir: str = None):
        """
        Args:
            config_dir: directory holding the YAML files, defaults to this module's directory
        """
        if config_dir is None:
            config_dir = os.path.dirname(os.path.abspath(__file__))

        self.config_dir = Path(config_dir)
        self._configs = {}
        self._logger = logging.getLogger(__name__)

    def load_yaml(self, filename: str) -> Dict[str, Any]:
        """
        Load and cache one YAML file.

        Raises:
            FileNotFoundError: the file does not exist
            ConfigurationError: the file is not valid YAML
        """
        file_path = self.config_dir / filename

        if not file_path.exists():
            raise FileNotFoundError(f"config file not found: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self._logger.error(f"YAML error in {filename}: {e}")
            raise ConfigurationError(f"invalid YAML in {file_path}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"{file_path} should contain a mapping")
        self._configs[filename] = config
        self._logger.info(f"loaded config file: {filename}")
        return config

    def get_config(self, filename: str = 'gdax.yaml') -> Dict[str, Any]:
        """
        Full configuration: defaults overlaid with the YAML file.
        A missing file means defaults only.
        """
        if filename not in self._configs:
            try:
                self.load_yaml(filename)
            except FileNotFoundError:
                self._logger.info(f"{filename} not found, using defaults")
                self._configs[filename] = {}
        return _merge(DEFAULT_CONFIG, self._configs[filename])

    def get_gdax_config(self) -> Dict[str, Any]:
        return self.get_config()['gdax']

    def get_logging_config(self) -> Dict[str, Any]:
        return self.get_config()['logging']


def _merge(defaults, overrides):
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
