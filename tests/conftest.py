"""Shared fixtures for the waitlist API tests.

Provides:
- InMemoryWaitlistStore, a stand-in for the Supabase-backed store that
  enforces the unique email constraint and assigns positions/codes the
  way the database defaults do
- Flask app and test client built with that store injected
"""

import itertools
import threading

import pytest

from waitlist import create_app
from waitlist.config import Config
from waitlist.store import StoreError, DuplicateEntryError

ALLOWED_ORIGIN = "https://trysavoy.com"
LOCAL_ORIGIN = "http://localhost:3000"
OTHER_ORIGIN = "https://evil.example.com"


class WaitlistTestConfig(Config):
    TESTING = True
    SUPABASE_URL = None
    SUPABASE_SERVICE_KEY = None
    CORS_ALLOWED_ORIGINS = [ALLOWED_ORIGIN, LOCAL_ORIGIN]
    LEADERBOARD_DEFAULT_LIMIT = 10
    LEADERBOARD_MAX_LIMIT = 100
    LOG_LEVEL = 'DEBUG'


class InMemoryWaitlistStore:
    """Same interface as WaitlistStore, rows kept in a dict keyed by email."""

    def __init__(self):
        self.rows = {}
        self.inserts = []
        self.failure = None
        self.stale_lookups = 0
        self.lookup_barrier = None
        self._local = threading.local()
        self._lock = threading.Lock()
        self._positions = itertools.count(1)

    # --- test controls ---------------------------------------------------

    def add(self, email, referral_count=0, referred_by=None):
        with self._lock:
            position = next(self._positions)
            row = {
                "email": email,
                "referred_by": referred_by,
                "current_position": position,
                "referral_code": f"REF{position:04d}",
                "referral_count": referral_count,
            }
            self.rows[email] = row
            return dict(row)

    def fail_with(self, error):
        self.failure = error

    # --- store interface -------------------------------------------------

    def find_by_email(self, email, columns='*'):
        if self.failure:
            raise self.failure
        if self.lookup_barrier is not None and not getattr(self._local, 'waited', False):
            # Hold every caller until all of them have done their first lookup
            self._local.waited = True
            self.lookup_barrier.wait(timeout=5)
            return None
        with self._lock:
            if self.stale_lookups > 0:
                self.stale_lookups -= 1
                return None
            row = self.rows.get(email)
            return dict(row) if row else None

    def insert_entry(self, email, referred_by=None):
        if self.failure:
            raise self.failure
        with self._lock:
            self.inserts.append((email, referred_by))
            if email in self.rows:
                raise DuplicateEntryError(
                    'duplicate key value violates unique constraint "waitlist_email_key"',
                    code='23505',
                )
        return self.add(email, referred_by=referred_by)

    def top_referrers(self, limit):
        if self.failure:
            raise self.failure
        with self._lock:
            rows = sorted(self.rows.values(), key=lambda r: r["referral_count"], reverse=True)
        return [
            {
                "email": r["email"],
                "referral_count": r["referral_count"],
                "current_position": r["current_position"],
            }
            for r in rows[:limit]
        ]


@pytest.fixture
def store():
    return InMemoryWaitlistStore()


@pytest.fixture
def app(store):
    return create_app(WaitlistTestConfig, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def broken_store(store):
    """Store whose every operation fails like a PostgREST error would."""
    store.fail_with(StoreError('relation "waitlist" does not exist', code='42P01'))
    return store
