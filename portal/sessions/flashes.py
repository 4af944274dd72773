"""
Flash Queue

One-time notices stored in a session under ``flashes`` and shown on the next
rendered page. Entries are plain ``{"message", "category"}`` objects in the
store and ``FlashEntry`` everywhere else.
"""

import logging
from dataclasses import asdict, dataclass

from portal.errors import SessionError

logger = logging.getLogger(__name__)

FLASHES_KEY = 'flashes'


@dataclass(frozen=True)
class FlashEntry:
    message: str
    category: str = 'info'

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict):
            raise ValueError(f'flash entry must be an object, got {type(raw).__name__}')
        message = raw.get('message')
        category = raw.get('category')
        if not isinstance(message, str) or not isinstance(category, str):
            raise ValueError(f'malformed flash entry: {raw!r}')
        return cls(message=message, category=category)

    def to_dict(self):
        return asdict(self)


def peek(session):
    """Decode the queued entries without removing them."""
    raw = session.get(FLASHES_KEY)
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning('Discarding flashes of unexpected type %s', type(raw).__name__)
        return []

    entries = []
    for item in raw:
        try:
            entries.append(FlashEntry.from_dict(item))
        except ValueError as e:
            logger.warning('Skipping flash entry: %s', e)
    return entries


def flash(session, message, category='info'):
    """Append a notice to the session's queue and save it.

    A failed save is logged, not raised: losing a notice must not fail the
    request that produced it.
    """
    entries = peek(session)
    entries.append(FlashEntry(message, category))
    session.set(FLASHES_KEY, [entry.to_dict() for entry in entries])
    try:
        session.save()
    except SessionError as e:
        logger.error('Error saving session: %s', e)
        return False
    return True


def drain(session):
    """Return every queued notice and clear the queue."""
    if FLASHES_KEY not in session:
        return []
    entries = peek(session)
    session.delete(FLASHES_KEY)
    try:
        session.save()
    except SessionError as e:
        logger.error('Error saving session: %s', e)
    return entries
