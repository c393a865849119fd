"""
Configuration Management

Loads profiling and output settings from a YAML file and environment
variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path('config') / 'fieldclip.yaml'


class ProfileSettings(BaseModel):
    """Tunables for field summaries and the fan-out coordinator."""

    head_size: int = Field(default=5, ge=1, description="Values shown in head/tail samples")
    top_k: int = Field(default=5, ge=1, description="Entries in the categorical frequency table")
    opaque_max_elements: int = Field(
        default=40, ge=1,
        description="Elements kept when pretty-printing an opaque value"
    )
    density_width: int = Field(default=45, description="Density plot width in characters")
    density_height: int = Field(default=19, description="Density plot height in lines")
    density_sample_size: int = Field(
        default=1_000_000, ge=2,
        description="Longer numeric fields are sampled to this size before plotting"
    )
    parallel_cell_threshold: int = Field(
        default=1_000_000, ge=0,
        description="Tables with more cells than this are profiled in parallel"
    )
    reserved_cores: int = Field(
        default=10, ge=0,
        description="Cores left free when sizing the worker pool"
    )
    max_workers: Optional[int] = Field(
        default=None, ge=1,
        description="Explicit worker pool size; overrides the reserved_cores rule"
    )
    executor: Literal["thread", "process"] = Field(
        default="thread",
        description="Worker pool kind used in parallel mode"
    )
    random_seed: Optional[int] = Field(default=None, description="Seed for density sampling")
    show_progress: bool = Field(default=False, description="Show a progress bar over fields")


class OutputSettings(BaseModel):
    """Where the document and its error sentinel are written."""

    output_dir: str = "/tmp/fieldclip"
    document_name: str = "menu.json"
    error_name: str = "error.json"

    @property
    def document_path(self) -> Path:
        return Path(self.output_dir) / self.document_name

    @property
    def error_path(self) -> Path:
        return Path(self.output_dir) / self.error_name


class Config:
    """
    fieldclip configuration manager.

    Loads configuration from:
    1. YAML file (config/fieldclip.yaml)
    2. Environment variables (.env)
    3. Command-line overrides via set()

    Example:
        >>> config = Config()
        >>> config.get('profile.top_k', 5)
        5
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        env_path = Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        explicit = config_file is not None
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        self.config: Dict[str, Any] = {}
        if Path(config_file).exists():
            self.config = load_yaml_config(config_file)
            logger.info(f"Loaded config from: {config_file}")
        elif explicit:
            raise ConfigError(f"Config file not found: {config_file}")
        else:
            logger.debug(f"No config file at {config_file}, using defaults")

        if not isinstance(self.config, dict):
            raise ConfigError(f"Config file must hold a mapping: {config_file}")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv('FIELDCLIP_OUTPUT_DIR'):
            self.set('output.output_dir', os.getenv('FIELDCLIP_OUTPUT_DIR'))

        if os.getenv('FIELDCLIP_LOG_LEVEL'):
            self.set('logging.level', os.getenv('FIELDCLIP_LOG_LEVEL'))

        for env_name, key in (
            ('FIELDCLIP_MAX_WORKERS', 'profile.max_workers'),
            ('FIELDCLIP_RANDOM_SEED', 'profile.random_seed'),
        ):
            raw = os.getenv(env_name)
            if raw:
                try:
                    self.set(key, int(raw))
                except ValueError as e:
                    raise ConfigError(f"{env_name} must be an integer, got {raw!r}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'output.output_dir'."""
        node: Any = self.config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any):
        """Assign a dotted key, replacing missing or non-mapping sections."""
        *sections, leaf = key.split('.')
        node = self.config
        for part in sections:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = value

    def profile_settings(self) -> ProfileSettings:
        """
        Build validated profiling settings from the 'profile' section.

        Raises:
            ConfigError: If a value is invalid
        """
        try:
            return ProfileSettings(**(self.config.get('profile') or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid profile settings: {e}") from e

    def output_settings(self) -> OutputSettings:
        """
        Build validated output settings from the 'output' section.

        Raises:
            ConfigError: If a value is invalid
        """
        try:
            return OutputSettings(**(self.config.get('output') or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid output settings: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the full configuration as a dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self.config.copy()
