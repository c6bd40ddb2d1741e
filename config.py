from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    advisor_model: str = "claude-haiku-4-5-20251001"
    advisor_max_tokens: int = 1024
    advisor_timeout_seconds: float = 30.0
    policy_file: str = "data/policy.json"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
