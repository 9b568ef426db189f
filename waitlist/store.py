# waitlist/store.py
"""
Supabase-backed access to the waitlist table.

The table is owned by the hosted database: positions, referral codes and
referral counts are filled in by its defaults and triggers. This module
only reads rows and inserts new ones, and translates PostgREST failures
into StoreError / DuplicateEntryError so callers never deal with the
client's exception types.
"""

import httpx
from flask import current_app
from postgrest.exceptions import APIError
from supabase import create_client

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = '23505'

ENTRY_COLUMNS = 'current_position, referral_code'
STATUS_COLUMNS = 'current_position, referral_code, referral_count'
LEADERBOARD_COLUMNS = 'email, referral_count, current_position'


class StoreError(Exception):
    """Raised when a waitlist store operation fails"""
    def __init__(self, message, code=None, original_error=None):
        self.message = message
        self.code = code
        self.original_error = original_error
        super().__init__(self.message)


class DuplicateEntryError(StoreError):
    """Raised when an insert hits the unique constraint on email"""
    pass


def _translate(error):
    if isinstance(error, APIError):
        code = getattr(error, 'code', None)
        message = getattr(error, 'message', None) or str(error)
        if code == UNIQUE_VIOLATION:
            return DuplicateEntryError(message, code=code, original_error=error)
        return StoreError(message, code=code, original_error=error)
    return StoreError(str(error), original_error=error)


class WaitlistStore:
    """Thin wrapper over a Supabase client scoped to one table."""

    def __init__(self, client, table='waitlist'):
        self.client = client
        self.table = table

    @classmethod
    def from_config(cls, config):
        client = create_client(config['SUPABASE_URL'], config['SUPABASE_SERVICE_KEY'])
        return cls(client, table=config.get('WAITLIST_TABLE', 'waitlist'))

    def _query(self):
        return self.client.table(self.table)

    def find_by_email(self, email, columns=ENTRY_COLUMNS):
        """Returns the row for `email`, or None if there is no such entry."""
        try:
            response = (
                self._query()
                .select(columns)
                .eq('email', email)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise _translate(e)

        rows = response.data or []
        return rows[0] if rows else None

    def insert_entry(self, email, referred_by=None):
        """
        Inserts a new entry and returns the stored row, including the
        position and referral code the database assigned.

        Raises:
            DuplicateEntryError: another entry already uses this email
            StoreError: any other failure
        """
        try:
            response = (
                self._query()
                .insert({"email": email, "referred_by": referred_by})
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise _translate(e)

        rows = response.data or []
        if not rows:
            raise StoreError(f"Insert into {self.table} returned no row")
        return rows[0]

    def top_referrers(self, limit):
        """Entries with the highest referral_count first."""
        try:
            response = (
                self._query()
                .select(LEADERBOARD_COLUMNS)
                .order('referral_count', desc=True)
                .limit(limit)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise _translate(e)

        return response.data or []


def init_store(app, store=None):
    """
    Attaches the store to the app once at start-up.

    A store passed in explicitly wins; otherwise one is built from the
    app config. Missing credentials leave the app without a store, and
    every request that needs it fails with a 500.
    """
    if store is None:
        if app.config.get('SUPABASE_URL') and app.config.get('SUPABASE_SERVICE_KEY'):
            store = WaitlistStore.from_config(app.config)
        else:
            app.logger.warning(
                "Supabase credentials not configured - waitlist endpoints will fail."
            )
    app.extensions['waitlist_store'] = store
    return store


def get_store():
    """Returns the store bound to the current app."""
    store = current_app.extensions.get('waitlist_store')
    if store is None:
        raise StoreError("Waitlist store not configured")
    return store
