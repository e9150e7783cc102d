"""YAML options file loading and validation.

An options file sets defaults for the conversion flags so they need not be
repeated on every invocation. Command-line flags override file values.

Options file structure:
    include_links: true
    include_images: false
    bullet: "*"
    max_depth: 150
    parser: html.parser
"""

from typing import Any, Dict

import yaml

from src.models.conversion_options import ConversionOptions, VALID_BULLETS

from .errors import ConfigError, InputReadError


class ConfigLoader:
    """Loads ConversionOptions from a YAML options file."""

    BOOLEAN_FIELDS = ('include_links', 'include_images')
    KNOWN_FIELDS = {'include_links', 'include_images', 'bullet', 'max_depth', 'parser'}

    @classmethod
    def load(cls, config_path: str) -> ConversionOptions:
        """Load and validate an options file.

        Args:
            config_path: Path to the YAML options file

        Returns:
            ConversionOptions with file values applied over the defaults

        Raises:
            InputReadError: If the file cannot be read
            ConfigError: If the file is not valid YAML or has invalid fields
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise InputReadError(config_path, 'Options file not found')
        except PermissionError:
            raise InputReadError(config_path, 'Permission denied')
        except OSError as e:
            raise InputReadError(config_path, str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return ConversionOptions()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Options must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_options(config_dict)

    @classmethod
    def _parse_options(cls, config_dict: Dict[str, Any]) -> ConversionOptions:
        unknown = set(config_dict) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(f"Unknown fields: {', '.join(sorted(map(str, unknown)))}")

        values: Dict[str, Any] = {}

        for name in cls.BOOLEAN_FIELDS:
            if name in config_dict:
                if not isinstance(config_dict[name], bool):
                    raise ConfigError("Must be true or false", config_field=name)
                values[name] = config_dict[name]

        if 'bullet' in config_dict:
            bullet = config_dict['bullet']
            if bullet not in VALID_BULLETS:
                raise ConfigError(
                    f"Must be one of {', '.join(VALID_BULLETS)}", config_field='bullet'
                )
            values['bullet'] = bullet

        if 'max_depth' in config_dict:
            max_depth = config_dict['max_depth']
            # bool is an int subclass
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
                raise ConfigError("Must be a positive integer", config_field='max_depth')
            values['max_depth'] = max_depth

        if 'parser' in config_dict:
            parser = config_dict['parser']
            if not isinstance(parser, str) or not parser.strip():
                raise ConfigError("Must be a non-empty string", config_field='parser')
            values['parser'] = parser.strip()

        return ConversionOptions(**values)
