from unittest import mock

from seqmerge.outlet import Outlet


def test_outlet_sends_to_listeners_in_order():
    calls = []
    outlet = Outlet()

    outlet.connect(lambda message: calls.append(('first', message)))
    outlet.connect(lambda message: calls.append(('second', message)))

    message = outlet.send('dictionary', 'events01')

    assert outlet.index == 0
    assert message == ('dictionary', 'events01')
    assert calls == [('first', ('dictionary', 'events01')),
                     ('second', ('dictionary', 'events01'))]


def test_outlet_failing_listener_does_not_stop_delivery():
    failing = mock.MagicMock()
    failing.side_effect = Exception('listener error')
    listener = mock.MagicMock()

    outlet = Outlet(1)
    outlet.connect(failing)
    outlet.connect(listener)

    outlet.send('dictionary', 'events01')

    assert failing.call_count == 1
    listener.assert_called_once_with(('dictionary', 'events01'))


def test_outlet_disconnect():
    listener = mock.MagicMock()
    outlet = Outlet()
    outlet.connect(listener)

    outlet.disconnect(listener)
    outlet.disconnect(listener)
    outlet.send('dictionary', 'events01')

    assert listener.call_count == 0
