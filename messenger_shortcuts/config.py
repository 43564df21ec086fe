from __future__ import annotations

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    start_url: str = "https://www.messenger.com/login"
    user_data_dir: str = "~/.messenger_shortcuts/profile"
    headless: bool = False
    control_server_enabled: bool = True
    control_host: str = "127.0.0.1"
    control_port: int = 8765
    min_entry_width: float = 50.0
    min_entry_height: float = 30.0
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()


settings = get_settings()
