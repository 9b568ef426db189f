# waitlist/services/entries.py
# This file holds the logic behind the waitlist endpoints.

import re

from flask import current_app
from waitlist.errors import ValidationError, NotFoundError, InternalError
from waitlist.store import (
    get_store,
    StoreError,
    DuplicateEntryError,
    ENTRY_COLUMNS,
    STATUS_COLUMNS,
)


# Leading integer, as JavaScript parseInt reads "3abc" or "3.7" as 3
LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _entry_summary(entry):
    return {
        "position": entry.get('current_position'),
        "referralCode": entry.get('referral_code'),
    }


def validate_email(email):
    """Returns the stripped email, or raises ValidationError."""
    if not isinstance(email, str):
        raise ValidationError("Invalid email")
    email = email.strip()
    if not email or '@' not in email:
        raise ValidationError("Invalid email")
    return email


def normalize_referral_code(referral_code):
    """
    Returns the referral code as a stripped string, or None when absent.

    Numeric codes are accepted as their string form; any other non-string
    value is rejected.
    """
    if referral_code is None:
        return None
    if isinstance(referral_code, bool) or not isinstance(referral_code, (str, int, float)):
        raise ValidationError("Invalid referral code")
    referral_code = str(referral_code).strip()
    return referral_code or None


def join_waitlist(email, referral_code=None):
    """
    Registers `email` on the waitlist, or returns its existing entry.

    The response is the same whether the email was new or already
    present, so callers cannot tell a repeat signup from a first one.

    Flow:
    1. Look up the email; return the entry if it exists
    2. Insert a new entry attributed to `referral_code`
    3. If the insert loses a race against a concurrent signup for the
       same email (unique violation), read the winner's row instead

    Raises:
        ValidationError: email missing or malformed
        InternalError: any store failure
    """
    email = validate_email(email)
    referred_by = normalize_referral_code(referral_code)

    try:
        store = get_store()

        existing = store.find_by_email(email, ENTRY_COLUMNS)
        if existing:
            return _entry_summary(existing)

        try:
            entry = store.insert_entry(email, referred_by=referred_by)
        except DuplicateEntryError:
            # Inserted by a concurrent request between the lookup and the insert
            entry = store.find_by_email(email, ENTRY_COLUMNS)
            if not entry:
                raise StoreError("Entry missing after unique violation")
            current_app.logger.info(
                f"Join race resolved to position {entry.get('current_position')}"
            )
            return _entry_summary(entry)

        current_app.logger.info(
            f"New waitlist signup at position {entry.get('current_position')}"
            + (f" referred by {referred_by}" if referred_by else "")
        )
        return _entry_summary(entry)

    except StoreError as e:
        current_app.logger.error(f"Join error: {e.message} (code={e.code})")
        raise InternalError()


def get_entry_status(email):
    """
    Returns position and referral data for an existing entry.

    Raises:
        ValidationError: no email given
        NotFoundError: the email is not on the waitlist
        InternalError: any store failure
    """
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email required")

    try:
        entry = get_store().find_by_email(email.strip(), STATUS_COLUMNS)
    except StoreError as e:
        current_app.logger.error(f"Status error: {e.message} (code={e.code})")
        raise InternalError()

    if entry is None:
        raise NotFoundError("Entry not found")

    return {
        "position": entry.get('current_position'),
        "referralCode": entry.get('referral_code'),
        "referralCount": entry.get('referral_count'),
    }


def parse_limit(raw, default=10, maximum=100):
    """
    Parses the leaderboard `limit` query value.

    Missing, non-numeric or non-positive values fall back to `default`;
    anything above `maximum` is clamped.
    """
    match = LEADING_INT.match(raw) if isinstance(raw, str) else None
    if match is None:
        return default
    limit = int(match.group(1))
    if limit < 1:
        return default
    return min(limit, maximum)


def get_leaderboard(limit):
    """Top entries by referral_count, highest first."""
    try:
        rows = get_store().top_referrers(limit)
    except StoreError as e:
        current_app.logger.error(f"Leaderboard error: {e.message} (code={e.code})")
        raise InternalError()

    return {"leaderboard": rows}
