from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    FRONTEND_URL: str = "http://localhost:3000"  # Dashboard origin for CORS

    # Key-value store backing the lead collection
    DATABASE_URL: str = "sqlite:///./leadtracker.db"
    DATABASE_ECHO: bool = False

    # Store keys
    LEADS_STORE_KEY: str = "leads"
    SAVED_VIEWS_STORE_KEY: str = "savedViews"

    # API Settings
    API_PREFIX: str = "/api"

    # Permanent removal of leads is guarded by this secret
    PURGE_PASSWORD: str = "admin123"

    # Import
    MAX_IMPORT_BYTES: int = 10 * 1024 * 1024

    # Views
    UPCOMING_WINDOW_DAYS: int = 7

    class Config:
        env_file = ".env"

settings = Settings()
