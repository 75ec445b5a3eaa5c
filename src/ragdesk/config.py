# src/ragdesk/config.py
"""Configuration loading utilities for ragdesk.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using ragdesk as a library

It handles:
- Finding and loading ragdesk.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating RagDesk instances from configuration
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pydantic
import yaml  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from ragdesk.ragdesk import RagDesk
    from ragdesk.settings import Settings

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./ragdesk_data"
CONFIG_FILES = ["ragdesk.yaml", "ragdesk.yml", ".ragdeskrc"]
ENV_FILE = ".env"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "provider",
    "llm_model",
    "embedding_model",
    "data_dir",
    "collection_name",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "chunk_size",
    "chunk_overlap",
    "default_k",
    "max_k",
    "fallback_sources",
    "parallel_source_search",
    "llm_model",
    "temperature",
    "answer_prompt",
    "response_labels",
    "max_context_chars",
    "snippet_chars",
    "num_retries",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    for warning in validate_config(config, config_path):
        logger.warning("%s. These keys will be ignored.", warning)

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from RAGDESK_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for name in ("chunk_size", "chunk_overlap", "default_k", "max_k", "num_retries"):
        if (val := _safe_int(os.environ.get(f"RAGDESK_{name.upper()}"))) is not None:
            result[name] = val
    for name in ("max_context_chars", "snippet_chars"):
        if (val := _safe_int(os.environ.get(f"RAGDESK_{name.upper()}"))) is not None:
            result[name] = val
    if (val := _safe_float(os.environ.get("RAGDESK_TEMPERATURE"))) is not None:
        result["temperature"] = val
    if "RAGDESK_FALLBACK_SOURCES" in os.environ:
        result["fallback_sources"] = _parse_list(os.environ["RAGDESK_FALLBACK_SOURCES"])
    if "RAGDESK_ANSWER_PROMPT" in os.environ:
        result["answer_prompt"] = os.environ["RAGDESK_ANSWER_PROMPT"] or None
    if "RAGDESK_PARALLEL_SOURCE_SEARCH" in os.environ:
        result["parallel_source_search"] = os.environ[
            "RAGDESK_PARALLEL_SOURCE_SEARCH"
        ].lower() in ("true", "1", "yes")

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract the 'settings:' section of a YAML config.

    Unknown keys are left out; validate_config reports them.
    """
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance

    Raises:
        pydantic.ValidationError: If the merged values are out of range
    """
    from ragdesk.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Merge: env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}
    return Settings(**merged)


@dataclass
class RagDeskConfig:
    """Configuration for creating a RagDesk instance."""

    provider: str
    llm_model: str
    embedding_model: str
    data_dir: str
    settings: Settings
    collection_name: str = "documents"
    llm_api_key: str | None = None
    embedding_api_key: str | None = None


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Return the data directory to use: override, then env, then yaml, then default."""
    return (
        data_dir
        or os.environ.get("RAGDESK_DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )


def get_ragdesk_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> RagDeskConfig | ConfigError:
    """Get configuration for creating a RagDesk instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        RagDeskConfig with all settings, or ConfigError if invalid
    """
    load_env_file()
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)
    provider = config.get("provider", "litellm")

    try:
        settings = build_settings(config)
    except pydantic.ValidationError as e:
        return ConfigError(
            message=f"Invalid settings: {e.errors()[0]['msg']}",
            suggestion="Check the settings: section of ragdesk.yaml and RAGDESK_* variables",
        )

    if provider != "litellm":
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm",
        )

    llm_model = (
        config.get("llm_model") or os.environ.get("RAGDESK_LITELLM_LLM_MODEL") or settings.llm_model
    )
    embedding_model = config.get("embedding_model") or os.environ.get(
        "RAGDESK_LITELLM_EMBEDDING_MODEL"
    )
    if not embedding_model:
        return ConfigError(
            message="LiteLLM provider requires an embedding_model.",
            suggestion="Set embedding_model in ragdesk.yaml or RAGDESK_LITELLM_EMBEDDING_MODEL",
        )

    return RagDeskConfig(
        provider=provider,
        llm_model=llm_model,
        embedding_model=embedding_model,
        data_dir=effective_data_dir,
        settings=settings,
        collection_name=config.get("collection_name") or "documents",
        llm_api_key=os.environ.get("RAGDESK_LLM_API_KEY"),
        embedding_api_key=os.environ.get("RAGDESK_EMBEDDING_API_KEY"),
    )


def create_ragdesk(config: RagDeskConfig) -> RagDesk:
    """Create a RagDesk instance from configuration."""
    from ragdesk.configuration import LiteLLMProvider, LocalStorage
    from ragdesk.ragdesk import RagDesk

    return RagDesk(
        provider=LiteLLMProvider(
            llm=config.llm_model,
            embedding=config.embedding_model,
            llm_api_key=config.llm_api_key,
            embedding_api_key=config.embedding_api_key,
        ),
        storage=LocalStorage(config.data_dir, collection_name=config.collection_name),
        settings=config.settings,
    )


def get_ragdesk(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> RagDesk | ConfigError:
    """Create a RagDesk instance based on configuration.

    This is a convenience function that combines get_ragdesk_config and
    create_ragdesk. For more control, use those functions separately.
    """
    config = get_ragdesk_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_ragdesk(config)
