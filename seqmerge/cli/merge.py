"""
-------------------
seqmerge.cli.merge
-------------------

Command line interface for merging event batches into a store.

The batches are merged, in the order given, into a fresh store and the resulting
store is printed one event per line::

    $ python -m seqmerge.cli merge a b
    0: 0 notei 70
    1: 1920 notei 62
    2: 3840 notei 70
    3: 5760 notei 62

"""
import asyncio
import sys
from logging import getLogger

from websockets.exceptions import WebSocketException

from seqmerge.batches import DEFAULT_BATCHES, DEFAULT_STORE, ConfigurationError, load_batches
from seqmerge.comm import Client, WebSocketListener
from seqmerge.dispatch import Dispatcher
from seqmerge.model import Event, parse_atoms
from seqmerge.outlet import Outlet
from seqmerge.storeapi import EventStoreException


log = getLogger(__name__)


def get_parser(subparsers):
    """Configures the subparser for the ``merge`` command.

    :param argparse.ArgumentParser subparser: subparser for commands.

    Returns :class:`argparse.ArgumentParser` configured for the ``merge`` command.
    """
    parser = subparsers.add_parser('merge', help='Merge event batches into a store')

    parser.add_argument('batches', nargs='*', help='Names of the batches to merge, in order')
    parser.add_argument('-c', '--config', dest='config', default=None,
                        help='YAML batch configuration file')
    parser.add_argument('-e', '--event', dest='events', action='append', default=[],
                        help='Extra event as "AT VALUE ...". May be repeated; merged as the last batch.')
    parser.add_argument('-s', '--store', dest='store', default=None,
                        help='Store name (default: %s)' % DEFAULT_STORE)
    parser.add_argument('--notify-url', dest='notify_url', default=None,
                        help='Forward store notifications to this websocket URL')

    return parser


def _format_atom(atom):
    if isinstance(atom, float) and atom.is_integer():
        return str(int(atom))
    return str(atom)


def format_entry(key, event):
    """Formats a store entry as ``<key>: <at> <msg values...>``.
    """
    return '%s: %s' % (key, ' '.join(_format_atom(atom) for atom in event.to_atoms()))


def _log_notification(message):
    log.info('notify: %s', ' '.join(str(atom) for atom in message))


def merge_batches(args, outlet):
    """Merges the batches selected by ``args`` and returns the resulting store.

    :param argparse.Namespace args: the parsed ``merge`` arguments.
    :param outlet: :class:`seqmerge.outlet.Outlet`, notification channel.
    """
    batches = dict(DEFAULT_BATCHES)
    store_name = DEFAULT_STORE
    if args.config:
        config = load_batches(args.config)
        batches.update(config.batches)
        store_name = config.store
    store_name = args.store or store_name

    dispatcher = Dispatcher(outlet=outlet, store_name=store_name, batches=batches)
    for name in args.batches:
        dispatcher.batch(name)
    if args.events:
        dispatcher.dispatch([Event.from_atoms(parse_atoms(text)) for text in args.events])

    return dispatcher.registry.get(store_name)


def run_merge(args, out=None):
    """Runs the ``merge`` command.

    Prints the merged store to ``out`` (default ``sys.stdout``). On error prints
    the message to ``sys.stderr`` and exits with status ``1``.

    :param argparse.Namespace args: the parsed ``merge`` arguments.
    """
    out = out or sys.stdout
    outlet = Outlet(0)
    outlet.connect(_log_notification)

    client = None
    try:
        if args.notify_url:
            client = Client.from_url(asyncio.new_event_loop(), args.notify_url)
            client.connect()
            outlet.connect(WebSocketListener(client))
        store = merge_batches(args, outlet)
    except KeyError as e:
        print('error: %s' % e.args[0], file=sys.stderr)
        sys.exit(1)
    except (EventStoreException, ConfigurationError, ValueError, OSError, WebSocketException) as e:
        print('error: %s' % e, file=sys.stderr)
        sys.exit(1)
    finally:
        if client is not None:
            if client.is_open():
                client.close()
            client.loop.close()

    for key, event in store.snapshot():
        print(format_entry(key, event), file=out)
