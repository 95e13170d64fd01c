from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "image-hash-service"
    host: str = "0.0.0.0"
    port: int = 9191
    log_level: str = "info"

    image_config_path: str = "Config.toml"
    tls_cert_path: str = "certs/cert.pem"
    tls_key_path: str = "certs/key.pem"

    refresh_interval: float = 60.0
    fetch_timeout: float = 30.0
    proxies: list[str] = []
    proxy_strategy: str = "round-robin"


settings = Settings()
