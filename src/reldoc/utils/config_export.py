"""Configuration export/import utilities"""
import yaml
from pathlib import Path
from typing import Optional

from ..core.config import CodecConfig
from ..exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_EXPORT_PATH = Path(".reldoc/config.yaml")


def export_config(config: CodecConfig, output_path: Optional[Path] = None) -> Path:
    """
    Export configuration to YAML file.

    Args:
        config: Configuration to export
        output_path: Where to save (default: .reldoc/config.yaml)

    Returns:
        Path to exported config file
    """
    if output_path is None:
        output_path = DEFAULT_EXPORT_PATH

    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(exclude_none=True, mode='json')

    with output_path.open("w") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=True,
            indent=2
        )

    logger.info("config_exported", path=str(output_path))
    return output_path


def import_config(config_path: Path) -> CodecConfig:
    """
    Import configuration from YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file does not hold a mapping
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        config_dict = yaml.safe_load(f) or {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Expected a mapping in {config_path}, got {type(config_dict).__name__}"
        )

    logger.info("config_imported", path=str(config_path))
    return CodecConfig(**config_dict)
