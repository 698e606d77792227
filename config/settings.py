"""
Application settings
"""
from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv(encoding='utf-8')


class Settings(BaseSettings):
    """Application settings"""

    # Database
    database_url: str = "sqlite:///./data/immidraft.db"

    # OpenAI
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"

    # API
    api_secret_key: str
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_file_path: str = "./logs/app.log"

    # Environment
    environment: str = "development"

    # Rate Limiting
    rate_limit_per_minute: int = 60

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # File Upload / Object storage
    upload_dir: str = "./data/uploads"
    max_file_size_mb: int = 10
    documents_bucket: str = "documents"
    evaluation_letters_bucket: str = "evaluation-letters"
    translations_bucket: str = "translations"
    evaluations_bucket: str = "evaluations"
    reports_bucket: str = "reports"

    # Translation
    default_source_language: str = "auto"
    default_target_language: str = "en"

    # Verification
    verification_ai_enabled: bool = False
    verification_ai_timeout_seconds: float = 15.0

    # Orders
    default_price_per_page: float = 25.0

    @property
    def cors_origins_list(self) -> List[str]:
        """Split CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
