"""
------------------
seqmerge.memstore
------------------

In-memory implementation of the Event Store.

This module provides :class:`DictEventStore`, an implementation of
:class:`seqmerge.storeapi.EventStore` that keeps the events in a ``dict``, and
:class:`StoreRegistry` which hands out process-wide stores by name:

.. code-block:: python

    from seqmerge.memstore import StoreRegistry
    from seqmerge.merger import merge

    registry = StoreRegistry()
    store = registry.get('events01')

    merge([{'at': 3840, 'msg': ['notei', 70]},
           {'at': 0, 'msg': ['notei', 70]}], store, notify=lambda: None)

    for key, event in store.snapshot():
        print(key, event.at, event.msg)

would print::

    >> 0 0 ('notei', 70)
    >> 1 3840 ('notei', 70)

"""
from threading import RLock
from logging import getLogger

from seqmerge.storeapi import EventStore, StoreUnavailable


log = getLogger(__name__)


class DictEventStore(EventStore):
    """Event store backed by an insertion-ordered ``dict``.

    The instances of this class carry an :class:`threading.RLock` in ``lock``.
    Every single operation holds it, and a merge holds it across the whole
    read/clear/rewrite cycle.

    :param name: ``str``, the logical name of the store.
    :param entries: ``dict``, optional initial entries. Entries are stored as
        given, without validation.
    """
    def __init__(self, name, entries=None):
        super(DictEventStore, self).__init__(name)
        self.lock = RLock()
        self._entries = dict(entries or {})

    def keys(self):
        try:
            self.lock.acquire()
            return list(self._entries.keys())
        finally:
            self.lock.release()

    def get(self, key):
        try:
            self.lock.acquire()
            return self._entries.get(key)
        finally:
            self.lock.release()

    def set(self, key, event):
        try:
            self.lock.acquire()
            self._entries[key] = event
        finally:
            self.lock.release()

    def clear(self):
        try:
            self.lock.acquire()
            self._entries.clear()
        finally:
            self.lock.release()

    def snapshot(self):
        """Returns a ``list`` of ``(key, entry)`` pairs in insertion order.

        After a merge the insertion order is the key order ``0..n-1``.
        """
        try:
            self.lock.acquire()
            return list(self._entries.items())
        finally:
            self.lock.release()

    def events(self):
        """Returns the entries in insertion order.
        """
        return [entry for _, entry in self.snapshot()]

    def __len__(self):
        try:
            self.lock.acquire()
            return len(self._entries)
        finally:
            self.lock.release()

    def __repr__(self):
        return 'DictEventStore(%r, %d entries)' % (self.name, len(self))


class StoreRegistry:
    """Process-wide registry of named event stores.

    Stores are created lazily on first access. The instances of this class are
    thread-safe and can be shared between threads.

    :param factory: ``function``, creates a new store given its name. Defaults to
        :class:`DictEventStore`.
    """
    def __init__(self, factory=DictEventStore):
        self.factory = factory
        self.stores = {}
        self.lock = RLock()

    def get(self, name, create=True):
        """Looks up the store with the given name.

        :param name: ``str``, the logical name of the store.
        :param create: ``bool``, create the store if it does not exist yet.

        Returns the :class:`seqmerge.storeapi.EventStore`. Raises
        :class:`seqmerge.storeapi.StoreUnavailable` if the name is invalid, if
        the store does not exist and ``create`` is ``False``, or if the factory
        fails to create it.
        """
        if not isinstance(name, str) or not name:
            raise StoreUnavailable('Invalid store name: %r' % (name,))
        try:
            self.lock.acquire()
            store = self.stores.get(name)
            if store is None:
                if not create:
                    raise StoreUnavailable('No such store: %s' % name)
                try:
                    store = self.factory(name)
                except Exception as e:
                    raise StoreUnavailable('Unable to create store %s: %s' % (name, e)) from e
                self.stores[name] = store
                log.debug('Created store %s', name)
            return store
        finally:
            self.lock.release()

    def drop(self, name):
        """Removes the named store from the registry. Unknown names are ignored.
        """
        try:
            self.lock.acquire()
            self.stores.pop(name, None)
        finally:
            self.lock.release()

    def names(self):
        """Returns the sorted names of the registered stores.
        """
        try:
            self.lock.acquire()
            return sorted(self.stores)
        finally:
            self.lock.release()
