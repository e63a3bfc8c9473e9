
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Reimburse API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (any async SQLAlchemy URL; SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./reimburse_dev.db",
        alias="DATABASE_URL",
    )

    # Identity is asserted by the upstream auth proxy in this header
    user_id_header: str = Field(default="X-User-Id", alias="USER_ID_HEADER")

    # Create missing tables at startup instead of running Alembic (local dev)
    auto_create_schema: bool = Field(default=False, alias="AUTO_CREATE_SCHEMA")

    # Message board
    message_max_length: int = Field(default=1000, alias="MESSAGE_MAX_LENGTH")
    messages_page_limit: int = Field(default=50, alias="MESSAGES_PAGE_LIMIT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
