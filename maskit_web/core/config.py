from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "MasKIT Web"
    API_V1_STR: str = "/api/v1"

    # Default values that can be overridden by environment variables
    ALLOWED_ORIGINS: List[str] = ["*"]  # In production, specify actual domains
    ALLOWED_ORIGIN_REGEX: Optional[str] = None
    MASKIT_API_URL: str = "https://quest.ms.mff.cuni.cz/maskit/api"
    SOUDEC_API_URL: str = "https://quest.ms.mff.cuni.cz/soudec/api"
    REQUEST_TIMEOUT: float = 60.0  # seconds, the remote service can be slow on long texts
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"

settings = Settings()
