"""
------------------
seqmerge.storeapi
------------------

Event Store API
^^^^^^^^^^^^^^^

Defines the interface a keyed event store must provide to take part in a merge,
and the exceptions raised when a store or its entries cannot be used.
"""
from abc import abstractmethod


class EventStore:
    """EventStore is the keyed collection holding the published events.

    The keys of the store, after a merge, are the contiguous sequence
    ``0..n-1`` and the events are ordered by their ``at`` time. The store
    itself does not guarantee any ordering of :meth:`EventStore.keys`.

    A store may expose a ``lock`` (any object with ``acquire``/``release``).
    When present, a merge holds it for the whole read/clear/rewrite cycle.

    :param name: ``str``, the logical name of the store, e.g. ``"events01"``.
    """
    lock = None

    def __init__(self, name):
        self.name = name

    @abstractmethod
    def keys(self):
        """Returns the keys currently in the store.

        Some stores return ``None`` when empty or a bare key when holding a
        single entry. Use :func:`seqmerge.merger.normalized_keys` to read them.
        """
        pass

    @abstractmethod
    def get(self, key):
        """Looks up the entry stored under ``key``.

        Returns the entry or ``None`` if there is no such key.
        """
        pass

    @abstractmethod
    def set(self, key, event):
        """Stores ``event`` under ``key``, replacing any previous entry.
        """
        pass

    @abstractmethod
    def clear(self):
        """Removes all entries from the store.
        """
        pass


class EventStoreException(Exception):
    """General store error.
    """
    pass


class MalformedEntry(EventStoreException, ValueError):
    """Raised when a stored or supplied event lacks a numeric ``at`` or a ``msg``.

    Raised before the store is modified, so the store is left untouched.
    """
    pass


class StoreUnavailable(EventStoreException):
    """Raised when the named store cannot be reached or created.
    """
    pass
