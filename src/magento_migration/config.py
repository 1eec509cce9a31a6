import os
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv

# Application root holds the .env file and the logs directory
PROJECT_ROOT = Path(os.getenv('APP_ROOT', os.getcwd()))
ENV_PATH = PROJECT_ROOT / '.env'

load_dotenv(ENV_PATH)

logger = logging.getLogger(__name__)

def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse string to boolean with various formats."""
    if isinstance(value, bool):
        return value
    if value is None:
        return default

    true_values = ('true', 't', 'yes', 'y', 'on', '1')
    false_values = ('false', 'f', 'no', 'n', 'off', '0')

    value_lower = str(value).lower().strip()
    if value_lower in true_values:
        return True
    if value_lower in false_values:
        return False
    return default

@dataclass
class Config:
    """Configuration class for the Magento converter service."""

    API_TOKEN: str = str(os.getenv('API_TOKEN', ''))
    APP_HOST: str = os.getenv('APP_HOST', '0.0.0.0')
    APP_PORT: int = int(os.getenv('APP_PORT', '8000'))

    # Debug and Development Settings
    DEBUG_MODE: bool = parse_bool(os.getenv('DEBUG_MODE'), False)

    # Logging Configuration
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE: str = str(PROJECT_ROOT / os.getenv('LOG_FILE', 'logs/converter.log'))

    # Database Configuration
    POSTGRES_USER: str = os.getenv('DB_USERNAME', 'migration')
    POSTGRES_PASSWORD: str = os.getenv('DB_PASSWORD')
    POSTGRES_DB: str = os.getenv('DB_DATABASE', 'migration_db')
    POSTGRES_HOST: str = os.getenv('POSTGRES_HOST', 'postgres')
    POSTGRES_PORT: int = int(os.getenv('POSTGRES_PORT', '5432'))
    POOL_MIN_SIZE: int = int(os.getenv('POOL_MIN_SIZE', '2'))
    POOL_MAX_SIZE: int = int(os.getenv('POOL_MAX_SIZE', '10'))

    # Target system defaults
    SYSTEM_LANGUAGE_ID: str = os.getenv('SYSTEM_LANGUAGE_ID', '2fbb5fe2e29a4d70aa5854ce7ce3e20b')
    SYSTEM_LOCALE_CODE: str = os.getenv('SYSTEM_LOCALE_CODE', 'en-GB')

    # Reference data lookups are memoised for the lifetime of a run
    REFERENCE_CACHE_TTL: int = int(os.getenv('REFERENCE_CACHE_TTL', '3600'))
    REFERENCE_CACHE_SIZE: int = int(os.getenv('REFERENCE_CACHE_SIZE', '1000'))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value safely with fallback to default.

        Args:
            key: Configuration key to retrieve
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default if key doesn't exist
        """
        return self._config_dict.get(key, default)

    def __post_init__(self):
        """Convert to dictionary after initialization"""
        self._config_dict = asdict(self)
        self._setup_database_url()

    def _setup_database_url(self):
        """Setup database URL from configuration"""
        self.DATABASE_URL = f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@" \
                          f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    def validate(self) -> bool:
        """Validate the configuration"""
        try:
            assert self.APP_PORT > 0, "App port must be positive"
            assert self.POOL_MIN_SIZE > 0, "Pool min size must be positive"
            assert self.POOL_MAX_SIZE >= self.POOL_MIN_SIZE, "Pool max size must not be below min size"
            assert self.REFERENCE_CACHE_TTL > 0, "Reference cache TTL must be positive"
            assert self.REFERENCE_CACHE_SIZE > 0, "Reference cache size must be positive"

            valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
            assert self.LOG_LEVEL.upper() in valid_log_levels, \
                f"Invalid log level. Must be one of {valid_log_levels}"

            required_db_fields = ['POSTGRES_USER', 'POSTGRES_PASSWORD', 'POSTGRES_DB', 'POSTGRES_HOST']
            missing_fields = [field for field in required_db_fields if not getattr(self, field)]
            if missing_fields:
                raise ValueError(f"Missing required database fields: {', '.join(missing_fields)}")

            os.makedirs(os.path.dirname(self.LOG_FILE), exist_ok=True)

            logger.info("Configuration validation successful")
            return True

        except AssertionError as e:
            logger.error(f"Configuration validation failed: {str(e)}")
            raise ValueError(f"Configuration validation failed: {str(e)}")

    @classmethod
    def load(cls) -> 'Config':
        """Load and validate configuration"""
        config = cls()
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return self._config_dict

    def __getitem__(self, key: str) -> Any:
        """Support dictionary-style access"""
        return self._config_dict[key]

    def __contains__(self, key: str) -> bool:
        """Support 'in' operator"""
        return key in self._config_dict

# Create global config instance
config = Config.load()
