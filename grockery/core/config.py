from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="GROCKERY_", extra="ignore")

    app_name: str = "grockery"
    config_path: str = "types.yaml"
    api_host: str = "0.0.0.0"
    api_port: int = 4200
    log_level: str = "INFO"

settings = Settings()
