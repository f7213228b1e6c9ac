"""Settings for the LinguaEducate service (env, .env and config/settings.yaml)."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# settings.yaml section -> Settings fields read from it
YAML_SECTIONS: dict[str, tuple[str, ...]] = {
    "server": ("host", "port", "allowed_origins"),
    "logging": ("log_format", "log_level"),
    "storage": ("data_dir", "seed_sample_data"),
    "learning": ("timezone", "question_bank_path"),
}


def project_root() -> Path:
    """Directory holding pyproject.toml, falling back to the source checkout root."""
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parents[2]


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Reads ``config/settings.yaml`` and maps its sections onto flat fields."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        # Values are produced all at once by __call__
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        path = project_root() / "config" / "settings.yaml"
        if not path.is_file():
            return {}
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        values: dict[str, Any] = {}
        for section, fields in YAML_SECTIONS.items():
            block = raw.get(section) or {}
            for name in fields:
                if block.get(name) is not None:
                    values[name] = block[name]
        return values


class Settings(BaseSettings):
    """Runtime configuration.

    Later sources lose: constructor arguments, then environment variables,
    then ``.env``, then ``config/settings.yaml``, then secret files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared secret expected in X-App-Secret; unset means no auth
    app_secret: str | None = None

    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:8000", "http://127.0.0.1:8000"]
    )

    log_format: str = Field(default="console", description="console or json")
    log_level: str = "DEBUG"

    data_dir: Path | None = None
    seed_sample_data: bool = True

    timezone: str | None = Field(default=None, description="IANA name; None = device-local")
    question_bank_path: Path | None = None

    root: Path = Field(default_factory=project_root)

    @property
    def store_dir(self) -> Path:
        """Key-value store folder, created on first access."""
        path = (self.data_dir or self.root / "data") / "store"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def question_bank_file(self) -> Path:
        return self.question_bank_path or self.root / "config" / "question_bank.yaml"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    return Settings()
