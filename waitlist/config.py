# waitlist/config.py

import os
from dotenv import load_dotenv

# Get the base directory of the application
basedir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the project root (no-op if it does not exist).
load_dotenv(os.path.join(basedir, '..', '.env'))

DEFAULT_ALLOWED_ORIGINS = [
    'https://trysavoy.com',
    'http://localhost:3000',
]


def parse_origins(raw):
    """Splits a comma-separated origin list, dropping blanks and trailing slashes."""
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    origins = [item.strip().rstrip('/') for item in raw.split(',')]
    return [origin for origin in origins if origin]


class Config:
    """
    Process-wide configuration for the waitlist API.

    Read once when the module is imported and handed to create_app(),
    which builds the store client from it. Tests subclass this to
    override values.
    """
    # --- Supabase Settings ---
    # The serverless deployment exposed the URL under the public prefix,
    # so both names are accepted.
    SUPABASE_URL = os.environ.get('SUPABASE_URL') or \
        os.environ.get('NEXT_PUBLIC_SUPABASE_URL')
    SUPABASE_SERVICE_KEY = os.environ.get('SUPABASE_SERVICE_KEY') or \
        os.environ.get('SUPABASE_SERVICE_ROLE_KEY')

    WAITLIST_TABLE = os.environ.get('WAITLIST_TABLE') or 'waitlist'

    # --- CORS Settings ---
    CORS_ALLOWED_ORIGINS = parse_origins(os.environ.get('CORS_ALLOWED_ORIGINS'))

    # --- Leaderboard Settings ---
    LEADERBOARD_DEFAULT_LIMIT = 10
    LEADERBOARD_MAX_LIMIT = int(os.environ.get('LEADERBOARD_MAX_LIMIT') or 100)

    # --- Logging ---
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
