from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "Campus Events API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Atlas SSO is not used; the base class still requires an app code
    ATLAS_APP_CODE: str = "CAMPUS_EVENTS"

    # Create tables on startup (disable when schema is managed externally)
    DB_AUTO_CREATE: bool = True

    # Auth JWT Settings
    JWT_SECRET: str
    JWT_REFRESH_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Email settings (empty SMTP_HOST = log only)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT_SECONDS: int = 10
    MAIL_FROM: str = "Campus Events <noreply@campus-events.local>"

    # Certificate settings
    CERTIFICATE_ISSUER_NAME: str = "Unified Campus Events Framework"


settings = Settings()
