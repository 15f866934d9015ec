from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./blog.db"

    # Security
    SECRET_KEY: str

    # Application
    APP_NAME: str = "Blog"
    SITE_TITLE: str = "Notes & Articles"
    DEBUG: bool = False
    LOG_DIR: str = "./logs"

    # Listings
    DEFAULT_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 100  # Larger pageSize values fall back to the default
    PAGE_SIZE_OPTIONS: str = "5,10,20"  # Selectable on category/tag views
    PAGE_WINDOW_SIZE: int = 5  # Numbered links shown besides first/last
    ADMIN_PAGE_SIZE: int = 5
    HOT_TAGS_LIMIT: int = 10
    RECENT_EVENTS_LIMIT: int = 10

    # Admin Panel
    ADMIN_SESSION_DAYS: int = 7  # Days until admin session expires

    # Server
    # Default to 0.0.0.0 for development, use env var HOST in production
    HOST: str = "0.0.0.0"  # nosec: B104
    PORT: int = 8000

    LOW_MEMORY_MODE: bool = True  # Enable reduced pool sizes

    @property
    def page_size_options_list(self) -> List[int]:
        return [
            int(size.strip())
            for size in self.PAGE_SIZE_OPTIONS.split(",")
            if size.strip().isdigit() and int(size.strip()) > 0
        ]

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()  # type: ignore
