from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSettings(BaseSettings):
    # Cookie attributes
    domain: str = "."
    path: str = "/"
    max_age_seconds: int = 3600
    http_only: bool = True
    secure: bool = False
    same_site: str = "strict"  # default/lax/strict/none
    cookie_name: str = "session"

    # Keys (blank = generated at startup, sessions die with the process)
    auth_key: str = ""
    encrypt_key: str = ""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
