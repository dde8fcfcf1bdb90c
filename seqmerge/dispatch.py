"""
------------------
seqmerge.dispatch
------------------

Entry points that merge a batch into a named store.

:class:`Dispatcher` resolves the store by name from a
:class:`seqmerge.memstore.StoreRegistry` on every call, merges the batch and
announces the change on its outlet.
"""
from logging import getLogger

from seqmerge.batches import DEFAULT_BATCHES, DEFAULT_STORE
from seqmerge.memstore import StoreRegistry
from seqmerge.merger import EventMerger
from seqmerge.outlet import Outlet


log = getLogger(__name__)


class Dispatcher:
    """Merges batches of events into the named store.

    :param registry: :class:`seqmerge.memstore.StoreRegistry`, where the store
        lives. A new registry is created if not given.
    :param outlet: :class:`seqmerge.outlet.Outlet`, notification channel. A new
        outlet ``0`` is created if not given.
    :param store_name: ``str``, the name of the store, default ``"events01"``.
    :param batches: ``dict``, named batches available to :meth:`batch`.
        Defaults to the built-in batches ``a`` and ``b``.
    """
    def __init__(self, registry=None, outlet=None, store_name=DEFAULT_STORE, batches=None):
        self.registry = registry if registry is not None else StoreRegistry()
        self.outlet = outlet if outlet is not None else Outlet(0)
        self.store_name = store_name
        self.batches = dict(DEFAULT_BATCHES if batches is None else batches)

    def dispatch(self, events):
        """Merges ``events`` into the store and notifies the outlet.

        Raises :class:`seqmerge.storeapi.StoreUnavailable` if the store cannot be
        resolved and :class:`seqmerge.storeapi.MalformedEntry` if any event is
        invalid. No notification is sent in either case.

        Returns the merged ``list`` of events.
        """
        store = self.registry.get(self.store_name)
        return EventMerger(store, self.outlet, self.store_name).merge(events)

    def batch(self, name):
        """Merges the named batch. Raises ``KeyError`` for an unknown name.
        """
        try:
            events = self.batches[name]
        except KeyError:
            raise KeyError('Unknown batch: %s' % name) from None
        log.debug('Dispatching batch %s (%d events) to %s', name, len(events), self.store_name)
        return self.dispatch(events)

    def a(self):
        """Merges batch ``a``, the built-in one unless configured otherwise.
        """
        return self.batch('a')

    def b(self):
        """Merges batch ``b``, the built-in one unless configured otherwise.
        """
        return self.batch('b')
