"""
--------------
seqmerge.comm
--------------

Remote delivery of store notifications.

A downstream sequencer running in another process can follow the store over a
WebSocket connection. :class:`Client` is a small client built on top of the
:mod:`asyncio` loop and :mod:`websockets`, and :class:`WebSocketListener`
forwards every outlet message to it as a JSON array:

.. code-block:: python

    import asyncio
    from seqmerge.comm import Client, WebSocketListener
    from seqmerge.outlet import Outlet

    client = Client(loop=asyncio.new_event_loop(), host='localhost', port=6434, path='/sequencer')
    client.connect()

    outlet = Outlet()
    outlet.connect(WebSocketListener(client))
    outlet.send('dictionary', 'events01')  # sends '["dictionary", "events01"]'

"""
import json
from logging import getLogger
from urllib.parse import urlparse

import websockets


log = getLogger(__name__)


class Client:
    """Client connection to a remote sequencer.

    The calls on this client are synchronous: each one runs the event loop until
    the underlying websocket operation completes.

    :param loop: :mod:`asyncio` event loop to use for this client.
    :param host: ``str``, remote hostname.
    :param port: ``int``, remote port.
    :param secure: ``bool``, is the connection secure.
    :param path: ``str``, the request path - for example: ``"/sequencer"``.
    """

    def __init__(self, loop, host, port, secure=False, path=None):
        self.loop = loop
        self.host = host
        self.port = port
        self.secure = secure
        self.path = path
        self.websocket = None
        self._is_open = False

    @classmethod
    def from_url(cls, loop, url):
        """Creates a client from a ``ws://`` or ``wss://`` URL.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ('ws', 'wss') or not parsed.hostname:
            raise ValueError('Invalid websocket URL: %s' % url)
        return cls(loop=loop, host=parsed.hostname, port=parsed.port,
                   secure=parsed.scheme == 'wss', path=parsed.path or None)

    async def _open_websocket(self):
        self.websocket = await websockets.connect(self._get_ws_url())
        self._is_open = True
        log.debug('[%s:%s]: connected', self.host, self.port)

    def connect(self):
        """Connect to the remote server.
        """
        self.loop.run_until_complete(self._open_websocket())

    def close(self, reason=None):
        """Close the connection to the remote server.

        :param reason: ``str``, the reason for disconnecting. If not given, a default ``"normal close"`` is
            sent to the server.
        """
        reason = reason or 'normal close'
        self._is_open = False
        self.loop.run_until_complete(self.websocket.close(code=1000, reason=reason))
        log.debug('[%s:%s]: explicitly closed. Reason=%s', self.host, self.port, reason)

    def _get_ws_url(self):
        url = 'wss://' if self.secure else 'ws://'
        url += self.host
        if self.port:
            url += ':' + str(self.port)
        if self.path:
            if self.path.startswith('/'):
                url += self.path
            else:
                url += '/' + self.path
        return url

    def send(self, message):
        """Send a ``str`` message to the remote server.

        Raises :class:`websockets.ConnectionClosed` if the connection was lost.
        """
        try:
            self.loop.run_until_complete(self.websocket.send(message))
        except websockets.ConnectionClosed:
            self._is_open = False
            log.debug('[%s:%s] connection closed', self.host, self.port)
            raise

    def is_open(self):
        """Check if the client connection is open.

        Returns ``True`` if the client connection is open, otherwise ``False``.
        """
        return self._is_open


class WebSocketListener:
    """Outlet listener that forwards each message to a :class:`Client` as JSON.

    :param client: :class:`Client`, connected client.
    """
    def __init__(self, client):
        self.client = client

    def __call__(self, message):
        if not self.client.is_open():
            log.warning('Dropping %s: connection to %s is not open', message, self.client.host)
            return
        self.client.send(json.dumps(list(message)))
