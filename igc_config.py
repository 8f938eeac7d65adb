#!/usr/bin/env python3
"""
Configuration handling for IGC to CSV converter

This module provides configuration management for the IGC to CSV converter.
It handles command line arguments, config file loading and output settings.
Settings are layered: built-in defaults, then the [Defaults] section of a
config file, then command line arguments.
"""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from igc_constants import (
    DEFAULT_OUT_PATH,
    DEFAULT_SENSOR_SUFFIX,
    DEFAULT_ENCODING,
    DEFAULT_OVERWRITE,
    CONFIG_SECTION_DEFAULTS,
    CONFIG_FILE_NAMES,
    CSV_EXTENSION
)

# Configure logger
logger = logging.getLogger(__name__)


@dataclass
class OutputSettings:
    """Where and how CSV files are written"""
    out_path: str = DEFAULT_OUT_PATH
    sensor_suffix: str = DEFAULT_SENSOR_SUFFIX
    overwrite: bool = DEFAULT_OVERWRITE

    def position_path(self, in_path: str) -> Path:
        """Output path of the B record CSV for an input file"""
        return self._output_dir(in_path) / (Path(in_path).stem + CSV_EXTENSION)

    def sensor_path(self, in_path: str) -> Path:
        """Output path of the K record CSV for an input file"""
        return self._output_dir(in_path) / (Path(in_path).stem + self.sensor_suffix + CSV_EXTENSION)

    def _output_dir(self, in_path: str) -> Path:
        if self.out_path and self.out_path != DEFAULT_OUT_PATH:
            return Path(self.out_path)
        return Path(in_path).parent


class ConfigParser:
    """
    Handles parsing of configuration files.
    Separates the parsing logic from the configuration storage.
    """

    def __init__(self):
        """Initialize the config parser"""
        self.parser = configparser.RawConfigParser()

    def find_config_file(self, cli_path: Optional[str] = None) -> Optional[str]:
        """Find a configuration file to use"""
        if cli_path and os.path.isfile(cli_path):
            logger.info(f"Using configuration file: {cli_path}")
            return cli_path

        if cli_path:
            logger.warning(f"Configuration file not found: {cli_path}")

        # Look in standard locations
        paths = ('.', os.path.dirname(os.path.abspath(__file__)))

        for path in paths:
            for file in CONFIG_FILE_NAMES:
                full_path = os.path.join(path, file)
                if Path(full_path).is_file():
                    logger.info(f"Found configuration file: {full_path}")
                    return full_path

        logger.debug("No configuration file found, using defaults")
        return None

    def load_config_file(self, file_path: Optional[str] = None) -> bool:
        """Load configuration from file"""
        config_file = self.find_config_file(file_path)
        if not config_file:
            return False

        try:
            self.parser.read(config_file)
            return True
        except configparser.Error as e:
            logger.error(f"Error reading config file: {e}")
            return False

    def get_sections(self) -> List[str]:
        """Get all section names from the configuration file"""
        return self.parser.sections()

    def get_default_settings(self) -> Dict[str, Any]:
        """Get default settings from configuration"""
        defaults: Dict[str, Any] = {}

        if CONFIG_SECTION_DEFAULTS in self.parser:
            section = self.parser[CONFIG_SECTION_DEFAULTS]

            # Copy all values from defaults section
            for key, value in section.items():
                defaults[key] = value

            if 'overwrite' in defaults:
                try:
                    defaults['overwrite'] = section.getboolean('overwrite')
                except ValueError:
                    logger.warning(f"Invalid Overwrite value '{defaults['overwrite']}', using default")
                    defaults['overwrite'] = DEFAULT_OVERWRITE

        return defaults


class Config:
    """Main configuration class for IGC to CSV converter"""

    def __init__(self, cli_args):
        """Initialize with command line arguments"""
        self.parser = ConfigParser()
        self.cli_args = cli_args

        # Initialize defaults
        self.output = OutputSettings()
        self.encoding = DEFAULT_ENCODING

        # Load configuration
        self._load_config()

    def _load_config(self):
        """Load and process configuration"""
        self.parser.load_config_file(getattr(self.cli_args, 'config', None))

        defaults = self.parser.get_default_settings()

        if 'outpath' in defaults:
            self.output.out_path = defaults['outpath']
        if 'sensorsuffix' in defaults:
            self.output.sensor_suffix = defaults['sensorsuffix']
        if 'overwrite' in defaults:
            self.output.overwrite = defaults['overwrite']
        if 'encoding' in defaults:
            self.encoding = defaults['encoding']

        # Apply CLI arguments (override config file)
        cli_output = getattr(self.cli_args, 'output', None)
        if cli_output:
            self.output.out_path = cli_output

        cli_suffix = getattr(self.cli_args, 'sensor_suffix', None)
        if cli_suffix:
            self.output.sensor_suffix = cli_suffix

    @property
    def outPath(self) -> str:
        """Get output path"""
        return self.output.out_path

    @property
    def sensorSuffix(self) -> str:
        """Get suffix of the K record CSV file name"""
        return self.output.sensor_suffix

    @property
    def overwrite(self) -> bool:
        return self.output.overwrite
