"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (CRITIC__SECTION__KEY)
3. Legacy environment variables (CRITIC_COVERAGE_DISABLE, DEBUG, ...)
4. Project config (.critic.yaml next to the test files)
5. Global config (~/.config/critic/config.yaml)
6. Built-in defaults (lowest priority)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from critic.config.constants import PROJECT_CONFIG_NAME
from critic.config.models import (
    CoverageConfig,
    CriticConfig,
    DebugConfig,
    HarnessConfig,
    LoggingConfig,
)
from critic.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/critic/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _legacy_env_config(environ: Mapping[str, str]) -> dict[str, Any]:
    """Map the legacy environment switches onto config sections.

    CRITIC_COVERAGE_DISABLE: any non-empty value disables coverage.
    CRITIC_COVERAGE_MIN_PERCENT: minimum coverage percentage.
    DEBUG: any non-empty value enables debug output and keeps the trace.
    """
    result: dict[str, Any] = {}
    if environ.get("CRITIC_COVERAGE_DISABLE"):
        result.setdefault("coverage", {})["enabled"] = False
    min_percent = environ.get("CRITIC_COVERAGE_MIN_PERCENT")
    if min_percent:
        try:
            value = int(min_percent)
        except ValueError as e:
            raise ConfigError.invalid_value(
                "CRITIC_COVERAGE_MIN_PERCENT", min_percent, "must be an integer"
            ) from e
        result.setdefault("coverage", {})["minimum_percent"] = value
    if environ.get("DEBUG"):
        result["debug"] = {"enabled": True}
        result.setdefault("coverage", {})["retain_trace_on_debug"] = True
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class CriticSettings(BaseSettings):
        """Root config. Env vars: CRITIC__COVERAGE__MINIMUM_PERCENT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CRITIC__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        coverage: CoverageConfig = CoverageConfig()
        harness: HarnessConfig = HarnessConfig()
        debug: DebugConfig = DebugConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml/legacy
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return CriticSettings


def load_config(
    project_root: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> CriticConfig:
    """Load config: defaults < global < project < legacy env < env vars < kwargs.

    Args:
        project_root: Directory holding .critic.yaml. Defaults to cwd.
        environ: Environment used for legacy switches. Defaults to os.environ.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    if environ is None:
        environ = os.environ

    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    yaml_config = _deep_merge(yaml_config, _load_yaml(project_root / PROJECT_CONFIG_NAME))
    yaml_config = _deep_merge(yaml_config, _legacy_env_config(environ))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
        return CriticConfig.model_validate(settings.model_dump())
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
