from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"


settings = Settings()
