"""
-----------------
seqmerge.batches
-----------------

Predefined event batches and the YAML batch configuration.

A batch configuration file names the batches that can be merged into a store:

.. code-block:: yaml

    beat: 480          # ticks per beat, optional
    store: events01    # store name, optional
    batches:
      a:
        - {at: 0, msg: [notei, 70]}
        - {beats: 8, msg: [notei, 70]}
      b:
        - {beats: 4, msg: [notei, 62]}
        - {beats: 12, msg: [notei, 62]}

Each event gives its time either in ticks (``at``) or in beats (``beats``).
"""
from collections import namedtuple
from logging import getLogger

import yaml

from seqmerge.model import Event
from seqmerge.storeapi import MalformedEntry


log = getLogger(__name__)


BEAT = 480.0
"""Ticks per beat."""

DEFAULT_STORE = 'events01'

BATCH_A = (
    Event(at=0.0 * BEAT, msg=('notei', 70)),
    Event(at=8.0 * BEAT, msg=('notei', 70)),
)

BATCH_B = (
    Event(at=4.0 * BEAT, msg=('notei', 62)),
    Event(at=12.0 * BEAT, msg=('notei', 62)),
)

DEFAULT_BATCHES = {'a': BATCH_A, 'b': BATCH_B}


BatchConfig = namedtuple('BatchConfig', ['beat', 'store', 'batches'])
"""Loaded batch configuration.
"""

BatchConfig.beat.__doc__ = """
    ``float``, ticks per beat.
"""

BatchConfig.store.__doc__ = """
    ``str``, the name of the store to merge into.
"""

BatchConfig.batches.__doc__ = """
    ``dict``, batch name to ``tuple`` of :class:`seqmerge.model.Event`.
"""


class ConfigurationError(ValueError):
    """Raised when a batch configuration file has an invalid structure.
    """
    pass


def event_from_config(item, beat=BEAT):
    """Builds an :class:`seqmerge.model.Event` from a configuration item.

    :param item: ``dict`` with ``msg`` and either ``at`` (ticks) or ``beats``.
    :param beat: ``float``, ticks per beat.
    """
    if not isinstance(item, dict):
        raise MalformedEntry('Invalid event: expected a mapping, got %r' % (item,))
    if 'beats' in item:
        if 'at' in item:
            raise MalformedEntry('Invalid event: both "at" and "beats" given (%r)' % (item,))
        beats = item['beats']
        if isinstance(beats, bool) or not isinstance(beats, (int, float)):
            raise MalformedEntry('Invalid event: beats is not a number (%r)' % (beats,))
        return Event(at=beats * beat, msg=item.get('msg'))
    return Event.from_entry(item)


def parse_batches(data):
    """Parses an already loaded configuration document.

    :param data: ``dict``, the configuration.

    Returns :class:`BatchConfig`.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError('Configuration must be a mapping')

    beat = data.get('beat', BEAT)
    if isinstance(beat, bool) or not isinstance(beat, (int, float)) or beat <= 0:
        raise ConfigurationError('beat must be a positive number, got %r' % (beat,))

    store = data.get('store', DEFAULT_STORE)
    if not isinstance(store, str) or not store:
        raise ConfigurationError('store must be a non-empty string, got %r' % (store,))

    raw_batches = data.get('batches') or {}
    if not isinstance(raw_batches, dict):
        raise ConfigurationError('batches must be a mapping of name to event list')

    batches = {}
    for name, items in raw_batches.items():
        if not isinstance(items, list):
            raise ConfigurationError('batch %s must be a list of events' % name)
        batches[str(name)] = tuple(event_from_config(item, beat) for item in items)

    return BatchConfig(beat=float(beat), store=store, batches=batches)


def load_batches(path):
    """Loads a YAML batch configuration file.

    :param path: ``str``, path to the configuration file.

    Returns :class:`BatchConfig`. Raises :class:`ConfigurationError` if the file
    is not valid YAML or has an invalid structure, and
    :class:`seqmerge.storeapi.MalformedEntry` for invalid events.
    """
    with open(path, 'r') as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigurationError('Invalid YAML in %s: %s' % (path, e)) from e
    config = parse_batches(data)
    log.info('Loaded %d batches from %s', len(config.batches), path)
    return config
