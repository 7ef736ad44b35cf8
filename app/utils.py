import logging
import os
import re
from datetime import datetime, timezone

from constants import ALLOWED_IMAGE_EXTENSIONS


# Custom logging formatter to support colors
class ColoredFormatter(logging.Formatter):
    COLORS = {
        'DEBUG': '\033[94m',   # Blue
        'INFO': '\033[92m',    # Green
        'WARNING': '\033[93m', # Yellow
        'ERROR': '\033[91m',   # Red
        'CRITICAL': '\033[95m' # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


# Filter to remove date from http access logs
class FilterRemoveDateFromWerkzeugLogs(logging.Filter):
    # '192.168.0.102 - - [30/Jun/2024 01:14:03] "%s" %s %s' -> '192.168.0.102 - "%s" %s %s'
    pattern: re.Pattern = re.compile(r' - - \[.+?] "')

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.pattern.sub(' - "', record.msg)
        return True


def get_or_create_secret_key():
    """
    Generate or load a persistent secret key for Flask sessions.
    The key is stored in CONFIG_DIR/.secret_key with restricted permissions.

    Returns:
        str: 64-character hex secret key
    """
    import secrets
    from constants import CONFIG_DIR

    logger = logging.getLogger('main')
    secret_key_file = os.path.join(CONFIG_DIR, '.secret_key')

    if os.path.exists(secret_key_file):
        try:
            with open(secret_key_file, 'r') as f:
                key = f.read().strip()
                if len(key) == 64:
                    return key
                logger.warning("Invalid secret key found, generating new one")
        except OSError as e:
            logger.error(f"Error reading secret key: {e}")

    key = secrets.token_hex(32)

    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(secret_key_file, 'w') as f:
            f.write(key)
        os.chmod(secret_key_file, 0o600)
        logger.info("Generated new secret key and saved to disk")
    except OSError as e:
        logger.error(f"Error saving secret key: {e}")
        logger.warning("Using non-persistent secret key")

    return key


def sanitize_sensitive_data(data, sensitive_keys=None):
    """
    Mask sensitive values before logging.

    Args:
        data: Dictionary, list or scalar to sanitize
        sensitive_keys: Substrings that mark a key as sensitive

    Returns:
        Sanitized copy of the data
    """
    if sensitive_keys is None:
        sensitive_keys = ['password', 'secret', 'token', 'key', 'authorization']

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if any(sens in k.lower() for sens in sensitive_keys):
                if isinstance(v, str) and len(v) > 4:
                    sanitized[k] = f"{v[:2]}***{v[-2:]}"
                else:
                    sanitized[k] = "***"
            elif isinstance(v, (dict, list)):
                sanitized[k] = sanitize_sensitive_data(v, sensitive_keys)
            else:
                sanitized[k] = v
        return sanitized

    if isinstance(data, list):
        return [sanitize_sensitive_data(item, sensitive_keys) if isinstance(item, (dict, list)) else item for item in data]

    return data


def now_utc():
    """Returns current datetime in UTC (aware)"""
    return datetime.now(timezone.utc)


def slugify(text):
    """'The Dark Knight!' -> 'the-dark-knight'"""
    slug = re.sub(r'[^a-z0-9]+', '-', (text or '').lower())
    return slug.strip('-')


def build_slug(title, release_year=None):
    base = slugify(title)
    if base and release_year:
        return f"{base}-{release_year}"
    return base


def blank_to_none(value):
    """Form fields arrive as empty strings; the catalog stores NULL instead."""
    if isinstance(value, str):
        value = value.strip()
    return value or None


def parse_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def allowed_image(filename):
    return '.' in (filename or '') and \
           filename.rsplit('.', 1)[1].lower() in ALLOWED_IMAGE_EXTENSIONS
