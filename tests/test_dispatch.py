from unittest import mock

import pytest

from seqmerge.dispatch import Dispatcher
from seqmerge.memstore import StoreRegistry
from seqmerge.model import Event
from seqmerge.outlet import Outlet
from seqmerge.storeapi import MalformedEntry, StoreUnavailable


def _outlet_with_listener():
    outlet = Outlet(0)
    listener = mock.MagicMock()
    outlet.connect(listener)
    return outlet, listener


def test_dispatch_batch_a_then_b():
    outlet, listener = _outlet_with_listener()
    registry = StoreRegistry()
    dispatcher = Dispatcher(registry=registry, outlet=outlet)

    dispatcher.a()
    store = registry.get('events01', create=False)
    assert store.snapshot() == [(0, Event(0, ('notei', 70))), (1, Event(3840, ('notei', 70)))]

    dispatcher.b()
    assert store.keys() == [0, 1, 2, 3]
    assert [event.at for event in store.events()] == [0, 1920, 3840, 5760]

    assert listener.call_args_list == [mock.call(('dictionary', 'events01')),
                                       mock.call(('dictionary', 'events01'))]


def test_dispatch_named_batches():
    outlet, listener = _outlet_with_listener()
    dispatcher = Dispatcher(outlet=outlet, store_name='events02',
                            batches={'one': [Event(10, ('x',))]})

    dispatcher.batch('one')

    assert dispatcher.registry.get('events02').events() == [Event(10, ('x',))]
    listener.assert_called_once_with(('dictionary', 'events02'))

    with pytest.raises(KeyError):
        dispatcher.batch('a')


def test_dispatch_store_unavailable_does_not_notify():
    outlet, listener = _outlet_with_listener()
    factory = mock.MagicMock()
    factory.side_effect = Exception('cannot create')
    dispatcher = Dispatcher(registry=StoreRegistry(factory=factory), outlet=outlet)

    with pytest.raises(StoreUnavailable):
        dispatcher.a()

    assert listener.call_count == 0


def test_dispatch_malformed_store_does_not_notify():
    outlet, listener = _outlet_with_listener()
    registry = StoreRegistry()
    registry.get('events01').set('broken', {'at': 'soon', 'msg': ['notei', 70]})
    dispatcher = Dispatcher(registry=registry, outlet=outlet)

    with pytest.raises(MalformedEntry):
        dispatcher.b()

    assert registry.get('events01').keys() == ['broken']
    assert listener.call_count == 0


def test_dispatch_a_and_b_use_configured_batches():
    outlet, listener = _outlet_with_listener()
    dispatcher = Dispatcher(outlet=outlet, batches={'a': [Event(10, ('x',))],
                                                    'b': [Event(5, ('y',))]})

    dispatcher.a()
    dispatcher.b()

    assert dispatcher.registry.get('events01').events() == [Event(5, ('y',)), Event(10, ('x',))]
    assert listener.call_count == 2
