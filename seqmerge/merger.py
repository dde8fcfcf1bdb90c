"""
----------------
seqmerge.merger
----------------

Merges a batch of new events with the events already held in an event store.

The merge reads every stored event, sorts the new and the stored events
together by their ``at`` time, clears the store and writes the events back under
the keys ``0..n-1``. Listeners are notified once the store is rewritten.

All entries are validated before the store is cleared, so a malformed entry
fails the merge with :class:`seqmerge.storeapi.MalformedEntry` and leaves the
store untouched.
"""
from collections.abc import Iterable
from logging import getLogger

from seqmerge.model import Event
from seqmerge.storeapi import MalformedEntry


log = getLogger(__name__)


def normalized_keys(store):
    """Reads the keys of the store as a ``list``.

    Stores may return ``None`` when empty, or a single bare key instead of a
    sequence when holding one entry. Both are normalized to a ``list``.

    :param store: :class:`seqmerge.storeapi.EventStore`, the store to read.

    Returns a ``list`` of keys.
    """
    keys = store.keys()
    if keys is None:
        return []
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        return [keys]
    return list(keys)


def _key_order(key):
    # numeric keys first, in numeric order; other keys after, by their text
    if isinstance(key, int) and not isinstance(key, bool):
        return (0, key, '')
    if isinstance(key, str) and key.isdecimal():
        return (0, int(key), '')
    return (1, 0, str(key))


def _store_name(store):
    return getattr(store, 'name', None) or repr(store)


def _read_stored(store):
    events = []
    for key in sorted(normalized_keys(store), key=_key_order):
        try:
            entry = store.get(key)
        except KeyError:
            entry = None
        if entry is None:
            raise MalformedEntry('[%s] no entry under key %r' % (_store_name(store), key))
        try:
            events.append(Event.from_entry(entry))
        except MalformedEntry as e:
            raise MalformedEntry('[%s] key %r: %s' % (_store_name(store), key, e)) from e
    return events


def _merge_into(new_events, store):
    incoming = [Event.from_entry(event) for event in new_events]
    stored = _read_stored(store)

    # sorted() is stable: at equal times new events stay ahead of stored ones
    merged = sorted(incoming + stored, key=lambda event: event.at)

    store.clear()
    for index, event in enumerate(merged):
        log.debug('[%s] + PUSH event at %s to index %d', _store_name(store), event.at, index)
        store.set(index, event)

    log.info('[%s] merged %d new with %d stored events', _store_name(store), len(incoming), len(stored))
    return merged


def merge(new_events, store, notify, lock=None):
    """Merges ``new_events`` into ``store`` and calls ``notify`` once.

    :param new_events: sequence of :class:`seqmerge.model.Event` (or ``dict``
        with ``at`` and ``msg``), the new batch. May be empty. The objects are
        never modified.
    :param store: :class:`seqmerge.storeapi.EventStore`, the store to rewrite.
    :param notify: ``function``, called without arguments after the store has
        been rewritten.
    :param lock: optional lock held during the read/clear/rewrite cycle.
        Defaults to the store's own ``lock``, if it has one.

    Returns the merged ``list`` of :class:`seqmerge.model.Event` in key order.

    Raises :class:`seqmerge.storeapi.MalformedEntry` if a new or a stored event
    is invalid. In that case the store is not modified and ``notify`` is not
    called.
    """
    lock = lock or getattr(store, 'lock', None)
    if lock is not None:
        lock.acquire()
    try:
        merged = _merge_into(new_events, store)
    finally:
        if lock is not None:
            lock.release()
    notify()
    return merged


class EventMerger:
    """Merges batches into a single store and announces every change on an outlet.

    After each successful merge the message ``("dictionary", <name>)`` is sent on
    the outlet, telling the downstream sequencer to re-read the store.

    :param store: :class:`seqmerge.storeapi.EventStore`, the store to merge into.
    :param outlet: :class:`seqmerge.outlet.Outlet`, where to send the
        notification. If ``None``, no notification is sent.
    :param name: ``str``, the store name used in the notification. Defaults to
        the store's ``name``.
    """
    def __init__(self, store, outlet=None, name=None):
        self.store = store
        self.outlet = outlet
        self.name = name or store.name

    def notify(self):
        if self.outlet is not None:
            self.outlet.send('dictionary', self.name)

    def merge(self, events):
        """Merges a batch of events into the store. See :func:`merge`.
        """
        return merge(events, self.store, self.notify)
