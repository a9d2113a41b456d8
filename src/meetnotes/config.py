"""
Configuration loader for meetnotes.
Loads configuration from YAML files and environment variables.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml
import os
from pydantic import BaseModel, ConfigDict
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class MeetnotesConfig(BaseModel):
    """Main meetnotes configuration."""

    model_config = ConfigDict(extra="allow")

    # Environment
    environment: str = "development"
    debug: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    # Database
    database_path: str = "meetnotes.db"

    # AI
    ai_model: str = "claude-3-5-sonnet-20241022"
    ai_max_tokens: int = 2048
    ANTHROPIC_API_KEY: str = ""
    OPENAI_API_KEY: str = ""

    # Logging
    log_level: str = "INFO"


class ConfigLoader:
    """Load and manage meetnotes configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[MeetnotesConfig] = None
        self.load()

    def load(self) -> MeetnotesConfig:
        """Load configuration from YAML and environment variables."""
        env = os.getenv("MEETNOTES_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        default_config = self._load_yaml(self.config_dir / "default.yaml")

        if config_file.exists():
            default_config.update(self._load_yaml(config_file))
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        default_config.update(self._load_from_env())

        self.config = MeetnotesConfig(**default_config)
        logger.info(f"Configuration loaded (environment: {env}, model: {self.config.ai_model})")
        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load YAML config {path}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        if db_path := os.getenv("MEETNOTES_DB_PATH"):
            config["database_path"] = db_path
        if model := os.getenv("MEETNOTES_AI_MODEL"):
            config["ai_model"] = model
        if max_tokens := os.getenv("MEETNOTES_AI_MAX_TOKENS"):
            config["ai_max_tokens"] = int(max_tokens)
        if log_level := os.getenv("MEETNOTES_LOG_LEVEL"):
            config["log_level"] = log_level
        if api_port := os.getenv("MEETNOTES_API_PORT"):
            config["api_port"] = int(api_port)

        # Provider keys
        if anthropic_key := os.getenv("ANTHROPIC_API_KEY"):
            config["ANTHROPIC_API_KEY"] = anthropic_key
        if openai_key := os.getenv("OPENAI_API_KEY"):
            config["OPENAI_API_KEY"] = openai_key

        return config

    def get(self) -> MeetnotesConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config

    def reload(self):
        """Reload configuration (useful for development)."""
        logger.info("Reloading configuration...")
        self.load()


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> MeetnotesConfig:
    """Get the global meetnotes configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader()
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> MeetnotesConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()


DB_PATH = get_config().database_path
