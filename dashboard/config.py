# dashboard/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict
import os


class Settings(BaseSettings):
    """API configuration"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # App settings
    app_name: str = "CV Insight API"
    debug: bool = False

    # Security
    secret_key: str = os.getenv("SECRET_KEY", "change-this-secret-key-in-production-12345")
    dashboard_password: str = os.getenv("DASHBOARD_PASSWORD", "admin123")
    # username -> password; when empty, any username may log in with dashboard_password
    user_passwords: Dict[str, str] = {}
    session_expire_hours: int = 24

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Paths
    database_path: str = "data/cvinsight.db"
    pipeline_config_path: str = "config/pipeline.yaml"
    log_dir: str = "data/logs"
    log_level: str = "INFO"


settings = Settings()
