from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_key: str = ""  # empty = no auth check (local dev)
    openai_api_key: str = ""  # empty = demo mode, fallback reports only
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = ""
    openai_max_tokens: int = 2048
    openai_temperature: float = 0.1
    upstream_timeout_seconds: float = 60.0
    # deliberate cap: the client has four capture slots, and 8 photos of at
    # most 2MB bound the upload and the size of a single model call
    max_photos: int = 8
    max_photo_size_bytes: int = 2 * 1024 * 1024  # 2MB
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
