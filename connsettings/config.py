"""
Connection settings configuration management
"""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Codec service settings"""

    # API settings
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Paths
    project_root: Path = Path(__file__).parent.parent
    log_dir: Path = project_root / "logs"
    store_path: Path = project_root / "data" / "connection_settings.bin"

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    # Store policy
    increment_counter_on_write: bool = True
    default_version_signature: int = 0x46

    class Config:
        env_prefix = "CONNSETTINGS_"
        env_file = ".env"


settings = Settings()
