from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "webaudit"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_PREFIX: str = "/api"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    # Lighthouse CLI (performance, SEO and accessibility categories)
    LIGHTHOUSE_PATH: str = "lighthouse"
    LIGHTHOUSE_TIMEOUT: int = 120  # seconds
    LIGHTHOUSE_LOG_LEVEL: str = "info"  # silent, error, info, verbose

    # Headless Chromium launched through Playwright
    BROWSER_LAUNCH_TIMEOUT_MS: int = 30000
    BROWSER_FLAGS: str = "--no-sandbox,--disable-gpu"

    # TLS header/certificate scan
    SECURITY_SCAN_TIMEOUT: float = 15.0
    CERT_EXPIRY_WARNING_DAYS: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS

    @property
    def browser_flags_list(self) -> List[str]:
        return [f.strip() for f in self.BROWSER_FLAGS.split(",") if f.strip()]


settings = Settings()
