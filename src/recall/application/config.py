from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from recall.domain.constants import DEFAULT_HOST, DEFAULT_PORT


def _find_config_file() -> Path | None:
    for f in (Path.home() / ".config/recall/config.toml", Path.home() / ".recall.toml"):
        if f.exists():
            return f
    return None


class AppConfig(BaseSettings):
    """
    Configuration model for recall.
    Supports loading from:
    1. Environment variables (RECALL_*)
    2. Config file (~/.config/recall/config.toml or ~/.recall.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECALL_",
        extra="ignore",
    )

    # Storage
    backend: Literal["sqlite", "memory"] = "sqlite"
    db_path: Path = Field(default_factory=lambda: Path.home() / ".local/share/recall/recall.db")

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Logging
    verbose: int = 0  # 0 warning, 1 info, 2 debug

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win: CLI overrides, then env, then the TOML file.
        toml_file = _find_config_file()
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("db_path", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Any:
        if v is None:
            return v
        return Path(v).expanduser()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/recall/config.toml (if exists)
    3. Environment variables (RECALL_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
