import os
import secrets
import platform
from dotenv import load_dotenv

# Load environment variables from .env file(s)
# 1) Project root .env
load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


def ensure_data_directory():
    """Ensure data directory exists with proper permissions (cross-platform)"""
    data_dir = os.environ.get('LEDGERDESK_DATA_DIR') or os.path.join(basedir, 'data')

    os.makedirs(data_dir, exist_ok=True)
    os.makedirs(os.path.join(data_dir, 'kuzu'), exist_ok=True)

    # Only set Unix permissions on non-Windows systems
    if platform.system() != "Windows":
        try:
            os.chmod(data_dir, 0o755)
        except (OSError, PermissionError):
            # Ignore permission errors (common on mounted volumes)
            pass

    return data_dir


# Initialize data directory
data_dir = ensure_data_directory()

# 2) Overlay data/.env so settings saved at runtime persist via the mounted volume
data_env_path = os.path.join(data_dir, '.env')
if os.path.exists(data_env_path):
    load_dotenv(dotenv_path=data_env_path, override=True)


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    # Expose data directory path for other modules
    DATA_DIR = data_dir

    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # For development, generate a temporary secret key
        # In production, always set SECRET_KEY environment variable
        if _env_flag('FLASK_DEBUG') or os.environ.get('FLASK_ENV') == 'development':
            SECRET_KEY = secrets.token_hex(32)
            print("⚠️  WARNING: Using temporary SECRET_KEY for development. Set SECRET_KEY in .env for production!")

    # CSRF Settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour
    WTF_CSRF_SSL_STRICT = False  # Allow CSRF over HTTP for development

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Kuzu Database Configuration
    KUZU_DB_PATH = os.environ.get('KUZU_DB_PATH') or os.path.join(data_dir, 'kuzu', 'ledgerdesk.db')

    # Application settings
    SITE_NAME = os.environ.get('SITE_NAME', 'LedgerDesk')
    TIMEZONE = os.environ.get('TIMEZONE') or 'UTC'
    CURRENCY_SYMBOL = os.environ.get('CURRENCY_SYMBOL', '$')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'WARNING'
