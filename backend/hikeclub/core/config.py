import logging
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional, List

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("hikeclub")

class Settings(BaseSettings):
    """
    Application settings.
    """
    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Minto Hiking Club"

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # LLM Settings
    GOOGLE_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.9
    GEMINI_TIMEOUT_SECONDS: float = 30.0

    # Trail finder client settings
    # When PROXY_URL is empty the site reaches the proxy in-process.
    PROXY_URL: Optional[str] = None
    PROXY_TIMEOUT_SECONDS: float = 45.0

    # Email Settings (contact form)
    GMAIL_SENDER_EMAIL: str = ""
    GMAIL_APP_PASSWORD: str = ""
    CONTACT_RECIPIENT_EMAIL: str = ""

    class Config:
        case_sensitive = True
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    return Settings()

def log_startup_checks(settings: Settings) -> None:
    """
    Validates the deployment configuration once, at startup.
    Missing credentials are reported but never abort the process: the proxy
    answers every request with a configuration error instead.
    """
    if not settings.GOOGLE_API_KEY:
        logger.error("GOOGLE_API_KEY is not set. The trail finder proxy will reject all requests.")
    if not (settings.GMAIL_SENDER_EMAIL and settings.GMAIL_APP_PASSWORD):
        logger.warning("Gmail credentials not found. Contact form delivery will be disabled.")
    logger.info("Application settings loaded and validated.")
