"""Application configuration."""

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class Settings(BaseSettings):
    """Settings loaded from init kwargs, environment, .env and .wikihome.yaml."""

    root_dir: Path = Path(".")
    home_file: str = "Home.md"
    # Skipped only when they are direct children of the scanned root
    excluded_folders: list[str] = ["uploads", "wikihome", ".git"]
    excluded_files: list[str] = []
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="WIKIHOME_",
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file=".wikihome.yaml",
        extra="ignore",
    )

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
            YamlConfigSettingsSource(settings_cls),
        )

    @property
    def skipped_files(self) -> frozenset[str]:
        """File names never listed, at any depth."""
        return frozenset([self.home_file, *self.excluded_files])


settings = Settings()
