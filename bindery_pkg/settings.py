#!/usr/bin/env python3
"""
Settings loader for Bindery static site generator.
Supports configuration from bindery.yml, bindery.yaml, or bindery.json files.
"""

import os
import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional

import yaml

from .core import SiteConfig
from .errors import ConfigError


class BinderySettings:
    """Load and manage Bindery configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content',
        'templates': 'templates',
        'output': 'build',
        'assets': None,
        'site_title': 'My Site',
        'site_name': 'My Site',
        'site_author': '',
        'site_description': '',
        'workers': None,
        'clean': False,
        'highlight_style': 'gruvbox-dark',
        'page_template': 'page.html',
        'index_template': 'index.html',
        'log_file': None,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['bindery.yml', 'bindery.yaml', 'bindery.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None
        self.logger = logging.getLogger('Bindery.settings')

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if loaded_settings:
                unknown = set(loaded_settings) - set(self.DEFAULT_SETTINGS)
                if unknown:
                    self.logger.warning(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
                self.settings.update(
                    {k: v for k, v in loaded_settings.items() if k in self.DEFAULT_SETTINGS})
                self.logger.debug(f"Loaded configuration from: {config_file}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    data = yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    data = json.load(f) or {}
                else:
                    raise ConfigError(f"Unsupported config file format: {file_ext}", config_path)
        except (IOError, OSError) as e:
            raise ConfigError(f"Error reading configuration file: {e}", config_path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}", config_path) from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file: {e}", config_path) from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration file must contain a mapping", config_path)
        return data

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'bindery.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Bindery Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_title: My Site\n")
                    f.write("site_name: My Site\n")
                    f.write("site_author: Jane Doe\n")
                    f.write("site_description: A blog built with Bindery\n\n")
                    f.write("# Build settings\n")
                    f.write("content: content\n")
                    f.write("templates: templates\n")
                    f.write("output: build\n")
                    f.write("assets: assets\n")
                    f.write("clean: false\n\n")
                    f.write("# Code highlighting theme (any Pygments style)\n")
                    f.write("highlight_style: gruvbox-dark\n")
                elif file_format == 'json':
                    sample_config = {
                        'site_title': 'My Site',
                        'site_name': 'My Site',
                        'site_author': 'Jane Doe',
                        'site_description': 'A blog built with Bindery',
                        'content': 'content',
                        'templates': 'templates',
                        'output': 'build',
                        'assets': 'assets',
                        'clean': False,
                        'highlight_style': 'gruvbox-dark',
                    }
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ConfigError(f"Unsupported config file format: {file_format}", config_path)
        except (IOError, OSError) as e:
            raise ConfigError(f"Error writing configuration file: {e}", config_path) from e

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()
        for key, value in args_dict.items():
            if value is not None and key in self.DEFAULT_SETTINGS:
                merged[key] = value
        return merged

    @staticmethod
    def site_config(settings: Dict[str, Any], year: int = None) -> SiteConfig:
        """Build the immutable SiteConfig for one run."""
        return SiteConfig(
            site_title=settings.get('site_title') or '',
            site_name=settings.get('site_name') or settings.get('site_title') or '',
            site_author=settings.get('site_author') or '',
            site_description=settings.get('site_description') or '',
            year=year if year is not None else datetime.now().year,
        )
