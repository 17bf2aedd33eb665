from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for manage-users and writes under RLS

    # Storage buckets for uploaded images
    labels_bucket: str = "beverage-labels"
    backgrounds_bucket: str = "taplist-backgrounds"
    max_image_bytes: int = 5 * 1024 * 1024

    # Taplist
    tap_count: int = 4
    default_title: str = "Welcome To Two Rotten Brewing"

    # Password reset links land on <origin><password_reset_path>
    site_url: str = "http://localhost:5173"
    password_reset_path: str = "/auth"

    # Realtime
    realtime_enabled: bool = False  # Bridge Supabase Realtime postgres_changes into the local feed
    events_heartbeat_seconds: float = 15.0
    events_queue_size: int = 100

    # App
    app_name: str = "taplist-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    login_rate_limit: str = "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
