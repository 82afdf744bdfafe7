"""
Estate Admin Backend Configuration

The admin console talks to a hosted backend-as-a-service:
- Table API (PostgREST):   {BACKEND_URL}/rest/v1/<table>
- Storage API:             {BACKEND_URL}/storage/v1/object/<bucket>/<path>
Authentication: project API key + optional user access token (JWT)
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv


LOGGER = logging.getLogger(__name__)


def _clean_env(value: str) -> str:
    """Trim whitespace and surrounding quotes from env values."""
    if value is None:
        return ''
    value = value.strip()
    if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
        value = value[1:-1]
    return value.strip()

# Load environment variables
env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(env_path)


class Config:
    """Configuration class for the backend connection and console defaults"""

    # Project URL, e.g. https://<project>.supabase.co
    BACKEND_URL = _clean_env(os.getenv('ESTATE_BACKEND_URL', ''))

    # Public (anon) API key of the project
    BACKEND_KEY = _clean_env(os.getenv('ESTATE_BACKEND_KEY', ''))

    # Signed-in staff user's access token; row-level security is evaluated against it
    ACCESS_TOKEN = _clean_env(os.getenv('ESTATE_ACCESS_TOKEN', ''))

    # Request Settings
    REQUEST_TIMEOUT = int(_clean_env(os.getenv('ESTATE_REQUEST_TIMEOUT', '30')))
    DEBUG = _clean_env(os.getenv('ESTATE_DEBUG', 'false')).lower() == 'true'

    # Language used for user-facing messages
    DEFAULT_LANGUAGE = _clean_env(os.getenv('ESTATE_DEFAULT_LANGUAGE', 'en')) or 'en'

    # Uploaded images wider than this are scaled down (0 keeps originals)
    MAX_IMAGE_WIDTH = int(_clean_env(os.getenv('ESTATE_MAX_IMAGE_WIDTH', '1920')))

    # Singleton content rows
    SINGLETON_ID = 1

    @classmethod
    def validate(cls) -> bool:
        """Validate required configuration"""
        missing = []
        if not cls.BACKEND_URL:
            missing.append('ESTATE_BACKEND_URL')
        if not cls.BACKEND_KEY:
            missing.append('ESTATE_BACKEND_KEY')
        if missing:
            LOGGER.error("Missing required configuration: %s", ', '.join(missing))
            return False

        if not cls.ACCESS_TOKEN:
            LOGGER.warning(
                "ESTATE_ACCESS_TOKEN is not set; requests run as the anonymous role "
                "and most writes will be refused by row-level security."
            )
        return True
