"""Configuration management: machining defaults and partial-config merging."""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from cncbuilder.core.exceptions import ConfigurationError
from cncbuilder.models import Sheet, CutConfig, ToolConfig, NestingMethod

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default_config.json"


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config file (default: default_config.json)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}", path=str(config_path))

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file is not valid JSON: {e}", path=str(config_path)) from e


def save_config(config: Dict[str, Any], config_path: str = None):
    """
    Save configuration to JSON file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config (default: default_config.json)
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4)
    logger.debug(f"Config saved to {config_path}")


def merge_with_defaults(partial: Optional[Dict[str, Any]], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay a partial section on its defaults.

    Keys missing from ``partial`` or set to None keep the default value.
    Neither argument is modified.
    """
    merged = dict(defaults)
    if partial:
        for key, value in partial.items():
            if value is not None:
                merged[key] = value
    return merged


def create_sheet_from_config(config: Dict[str, Any] = None, overrides: Dict[str, Any] = None) -> Sheet:
    """Build a Sheet from the 'chapa' section, optionally overlaid with caller values."""
    if config is None:
        config = load_config()
    return Sheet.from_dict(merge_with_defaults(overrides, config.get('chapa', {})))


def create_cut_from_config(config: Dict[str, Any] = None, overrides: Dict[str, Any] = None) -> CutConfig:
    """Build a CutConfig from the 'corte' section, optionally overlaid with caller values."""
    if config is None:
        config = load_config()
    return CutConfig.from_dict(merge_with_defaults(overrides, config.get('corte', {})))


def create_tool_from_config(config: Dict[str, Any] = None, overrides: Dict[str, Any] = None) -> ToolConfig:
    """Build a ToolConfig from the 'ferramenta' section, optionally overlaid with caller values."""
    if config is None:
        config = load_config()
    return ToolConfig.from_dict(merge_with_defaults(overrides, config.get('ferramenta', {})))


def default_nesting_method(config: Dict[str, Any] = None) -> NestingMethod:
    """Nesting method configured under 'nesting.metodo'."""
    if config is None:
        config = load_config()
    return NestingMethod(config.get('nesting', {}).get('metodo', NestingMethod.GUILLOTINE.value))


def default_include_comments(config: Dict[str, Any] = None) -> bool:
    if config is None:
        config = load_config()
    return bool(config.get('saida', {}).get('incluirComentarios', True))


__all__ = [
    'CONFIG_DIR',
    'DEFAULT_CONFIG_PATH',
    'load_config',
    'save_config',
    'merge_with_defaults',
    'create_sheet_from_config',
    'create_cut_from_config',
    'create_tool_from_config',
    'default_nesting_method',
    'default_include_comments',
]
