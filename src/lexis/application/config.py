from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexis.domain.constants import (
    DEFAULT_SESSION_LIMIT,
    DEFAULT_WEAK_ACCURACY_THRESHOLD,
    DEFAULT_WEAK_EASE_THRESHOLD,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
)


def _config_files() -> list[Path]:
    return [
        Path.home() / ".config/lexis/config.toml",
        Path.home() / ".lexis.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for lexis.
    Supports loading from:
    1. Environment variables (LEXIS_*)
    2. Config file (~/.config/lexis/config.toml or ~/.lexis.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIS_",
        extra="ignore",
    )

    # Paths
    state_file: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/lexis/state.json"
    )

    # Review thresholds
    weak_ease_threshold: float = DEFAULT_WEAK_EASE_THRESHOLD
    weak_accuracy_threshold: float = DEFAULT_WEAK_ACCURACY_THRESHOLD

    # Sessions and search
    session_limit: int = Field(default=DEFAULT_SESSION_LIMIT, ge=1)
    search_limit: int | None = Field(default=None, ge=1)

    # Default log verbosity; `-v` on the command line can only raise it.
    verbose: int = Field(default=0, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        # Earlier sources take priority: CLI overrides, then env, then file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("state_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path:
        return Path(v).expanduser()

    @field_validator("weak_ease_threshold")
    @classmethod
    def check_ease_threshold(cls, v: float) -> float:
        if not (MIN_EASE_FACTOR <= v <= MAX_EASE_FACTOR):
            raise ValueError(
                f"weak_ease_threshold must be within [{MIN_EASE_FACTOR}, {MAX_EASE_FACTOR}]"
            )
        return v

    @field_validator("weak_accuracy_threshold")
    @classmethod
    def check_accuracy_threshold(cls, v: float) -> float:
        if not (0.0 <= v <= 100.0):
            raise ValueError("weak_accuracy_threshold must be within [0, 100]")
        return v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexis/config.toml (if exists)
    3. Environment variables (LEXIS_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes every option; only explicit values should override.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
