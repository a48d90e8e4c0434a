"""
Configuration management using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    app_name: str = "MindPal API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"

    # CORS Settings - accepts comma-separated string or list
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    def get_allowed_origins(self) -> list[str]:
        """Get allowed origins as a list."""
        if isinstance(self.allowed_origins, list):
            return self.allowed_origins
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # Supabase Settings
    supabase_url: str
    supabase_service_role_key: str
    supabase_anon_key: str | None = None
    supabase_jwt_secret: str  # Required for JWT verification

    # AWS Bedrock Settings (journal analysis)
    aws_region: str = "us-east-2"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    bedrock_model_id: str = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"

    # Hugging Face Inference Settings
    hf_api_key: str | None = None
    hf_api_url: str = "https://api-inference.huggingface.co/models"

    # Economy
    starting_coins: int = 100
    journal_coin_reward: int = 25

    # Seconds between polls for new chat messages on a websocket
    chat_poll_interval: float = 2.0


# Global settings instance
settings = Settings()
