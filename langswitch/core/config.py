from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging
from pathlib import Path

_logger = logging.getLogger(__name__)

# Load .env from the project root first, then from the working directory
project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=True)
    _logger.info(f"Loaded .env file from: {env_path}")
elif Path(".env").exists():
    load_dotenv(Path(".env"), override=True)
    _logger.info(f"Loaded .env file from: {Path('.env').absolute()}")


class Settings(BaseSettings):
    """Settings loaded from environment variables."""
    
    # Database
    database_url: str = ""
    echo_sql: bool = False
    
    # Hex form of the identity every translation table treats as "the default language"
    default_language_id: str = "2fbb5fe2e29a4d70aa5854ce7ce3e20b"
    
    # Where Language rows live
    language_table: str = "language"
    language_id_column: str = "id"
    
    # Only tables matching this glob get their default rows reconciled
    translation_table_pattern: str = "*_translation"
    
    class Config:
        env_file = ".env"
        case_sensitive = False
    
    @property
    def default_language_id_bytes(self) -> bytes:
        """The system default identity as raw bytes."""
        return bytes.fromhex(self.default_language_id)


# Create settings instance
settings = Settings()
