from pydantic_settings import BaseSettings
from typing import List, Any, Optional
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Campus ERP"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    PORT: Optional[int] = None  # Overrides the per-service default below
    ADMIN_PORT: int = 4001
    ACADEMIC_PORT: int = 4002

    # ==========================================
    # Supabase (hosted Postgres + auth)
    # ==========================================
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_TIMEOUT: float = 10.0  # seconds

    @property
    def SUPABASE_CONFIGURED(self) -> bool:
        """Backend operations need the service role key, the anon key is not enough"""
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)

    # ==========================================
    # CORS (comma-separated string or JSON list)
    # ==========================================
    CORS_ORIGIN: str = "http://localhost:5173,http://localhost:5174,http://localhost:5175"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGIN)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_MS: int = 900000  # 15 minutes
    RATE_LIMIT_MAX_REQUESTS: int = 100
    REDIS_URL: str = ""  # Empty means in-process memory storage

    @property
    def RATE_LIMIT(self) -> str:
        """Limit string understood by slowapi/limits"""
        window_seconds = max(1, self.RATE_LIMIT_WINDOW_MS // 1000)
        return f"{self.RATE_LIMIT_MAX_REQUESTS} per {window_seconds} seconds"

    # ==========================================
    # Requests
    # ==========================================
    MAX_REQUEST_SIZE: int = 10485760  # 10MB
    DEFAULT_PAGE_SIZE: int = 20

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty disables the file handler

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def get_port(self, service_name: str) -> int:
        """Resolve the listening port for a service"""
        if self.PORT:
            return self.PORT
        if service_name == "admin-backend":
            return self.ADMIN_PORT
        return self.ACADEMIC_PORT


# Create settings instance
settings = Settings()
