from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "development"
    skill_id: Optional[str] = None  # Rejects envelopes for other skills when set
    default_timezone: str = "UTC"
    preferences_dir: str = "./preferences"
    calendar_id: str = "primary"
    device_api_timeout: float = 10.0
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
