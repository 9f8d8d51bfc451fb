import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from ENV_FILE if specified, or .env.local, or .env
env_file = os.getenv('ENV_FILE')
if env_file:
    load_dotenv(Path(env_file))
else:
    # Try .env.local first, then fall back to .env
    env_local = Path(__file__).parent.parent / '.env.local'
    if env_local.exists():
        load_dotenv(env_local)
    else:
        load_dotenv()


def _number_from_env(key: str, fallback: int) -> int:
    """Extract integer from environment variable with fallback."""
    raw = os.getenv(key)
    if raw is None:
        return fallback

    try:
        return int(raw)
    except ValueError:
        return fallback


def _flag_from_env(key: str, fallback: bool = False) -> bool:
    """Extract boolean from environment variable with fallback."""
    raw = os.getenv(key)
    if raw is None:
        return fallback

    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


# Backend selection ('smtp', 'sendgrid' or 'mailgun')
MAIL_BACKEND = os.getenv('MAIL_BACKEND', 'smtp')

# Shared transport configuration. The HTTP backends read the API key from
# SMTP_USERNAME and Mailgun reads its sending domain from SMTP_HOST.
SMTP_HOST = os.getenv('SMTP_HOST', '')
SMTP_PORT = _number_from_env('SMTP_PORT', 587)
SMTP_USERNAME = os.getenv('SMTP_USERNAME', '')
SMTP_PASSWORD = os.getenv('SMTP_PASSWORD', '')
SMTP_ENABLED = _flag_from_env('SMTP_ENABLED', False)

# Timeouts in seconds
SMTP_TIMEOUT = _number_from_env('SMTP_TIMEOUT', 30)
HTTP_TIMEOUT = _number_from_env('HTTP_TIMEOUT', 30)

# Mailgun region endpoint (https://api.eu.mailgun.net for EU domains)
MAILGUN_API_BASE = os.getenv('MAILGUN_API_BASE', 'https://api.mailgun.net')
