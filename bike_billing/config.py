"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "bike-billing"
    log_level: str = "INFO"

    # Charge policy
    overdue_threshold_hours: int = 12
    max_charge_amount: float = 1000.0

    # External Services
    payment_api_base: str = "http://localhost:8001"
    email_api_base: str = "http://localhost:8002"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    notification_max_retries: int = 3
    notification_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Notifications
    notification_subject: str = "Cobrança em atraso"
    notification_destination_template: str = "ciclista-{rider_id}@bicicletario.local"


settings = Settings()
