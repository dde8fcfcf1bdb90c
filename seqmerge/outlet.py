"""
----------------
seqmerge.outlet
----------------

Outbound notification channel.

An :class:`Outlet` delivers messages (tuples of values) to the registered
listeners. The merger uses outlet ``0`` to announce ``("dictionary", <name>)``
after a store has been rewritten.
"""
from logging import getLogger


log = getLogger(__name__)


class Outlet:
    """Numbered output channel with a list of listeners.

    :param index: ``int``, the channel index.
    """
    def __init__(self, index=0):
        self.index = index
        self.listeners = []

    def connect(self, listener):
        """Adds a listener to this outlet.

        :param listener: ``function``, called with the message ``tuple``:

            .. code-block:: python

                def listener(message):
                    pass

        """
        self.listeners.append(listener)

    def disconnect(self, listener):
        """Removes a previously added listener. Unknown listeners are ignored.
        """
        if listener in self.listeners:
            self.listeners.remove(listener)

    def send(self, *atoms):
        """Sends the message made of ``atoms`` to every listener, in the order they
        were added.

        A failing listener is logged and the remaining listeners still receive
        the message.

        Returns the sent message ``tuple``.
        """
        message = tuple(atoms)
        log.debug('outlet %d: %s', self.index, message)
        for listener in list(self.listeners):
            try:
                listener(message)
            # pylint: disable=broad-except
            # General case
            except Exception as e:
                log.exception(e)
        return message
