"""
---------------
seqmerge.model
---------------

The event model.

An :class:`Event` is a timestamped payload: ``at`` is the time offset in ticks
and ``msg`` is the ordered sequence of values to be sent at that time, for
example ``('notei', 70)``.
"""
from collections import namedtuple
from collections.abc import Iterable
from numbers import Real

from seqmerge.storeapi import MalformedEntry


_EventRecord = namedtuple('_EventRecord', ['at', 'msg'])


def _is_number(value):
    return isinstance(value, Real) and not isinstance(value, bool)


def check_at(at):
    """Validates an ``at`` time.

    :param at: the candidate time value.

    Returns ``at`` unchanged. Raises :class:`seqmerge.storeapi.MalformedEntry`
    if it is not a non-negative number.
    """
    if not _is_number(at):
        raise MalformedEntry('Invalid event: time is not a number (%r)' % (at,))
    if at != at or at < 0:
        raise MalformedEntry('Invalid event: time must be non-negative (%r)' % (at,))
    return at


def check_msg(msg):
    """Validates an event payload and returns it as a ``tuple``.
    """
    if msg is None:
        raise MalformedEntry('Invalid event: no message')
    if isinstance(msg, (str, bytes)) or not isinstance(msg, Iterable):
        raise MalformedEntry('Invalid event: message is not a sequence (%r)' % (msg,))
    return tuple(msg)


def _lookup(entry, name):
    try:
        return entry.get(name)
    except KeyError:
        return None


class Event(_EventRecord):
    """Immutable timestamped event.

    :param at: ``int`` or ``float``, non-negative time offset in ticks.
    :param msg: sequence of values, the payload. It is copied into a ``tuple``.

    Raises :class:`seqmerge.storeapi.MalformedEntry` for invalid values.
    """
    __slots__ = ()

    def __new__(cls, at, msg):
        return super(Event, cls).__new__(cls, check_at(at), check_msg(msg))

    @classmethod
    def from_entry(cls, entry):
        """Coerces a store entry or a supplied event into an :class:`Event`.

        Accepts an :class:`Event`, a ``dict`` with ``at`` and ``msg`` keys, or any
        dictionary-like object exposing ``get(name)``.

        :param entry: the entry to coerce.

        Returns an :class:`Event`. Raises :class:`seqmerge.storeapi.MalformedEntry`
        if the entry is missing, is not dictionary-like or lacks a valid
        ``at``/``msg``.
        """
        if isinstance(entry, Event):
            # _make and _replace skip __new__, so validate again
            return cls(entry.at, entry.msg)
        if entry is None:
            raise MalformedEntry('Invalid event: entry is missing')
        if not callable(getattr(entry, 'get', None)):
            raise MalformedEntry('Invalid event: entry is not a dictionary (%r)' % (entry,))
        return cls(_lookup(entry, 'at'), _lookup(entry, 'msg'))

    @classmethod
    def from_atoms(cls, atoms):
        """Builds an event from an "at" message atom list: ``[at, value, ...]``.
        """
        atoms = list(atoms)
        if not atoms or not _is_number(atoms[0]):
            raise MalformedEntry('Invalid "at" message: time is not a number')
        if len(atoms) < 2:
            raise MalformedEntry('Invalid "at" message: no message to cue')
        return cls(atoms[0], atoms[1:])

    def to_atoms(self):
        return (self.at,) + self.msg

    def to_dict(self):
        return {'at': self.at, 'msg': list(self.msg)}


def _atom(token):
    for convert in (int, float):
        try:
            return convert(token)
        except ValueError:
            pass
    return token


def parse_atoms(text):
    """Splits a whitespace-separated message into atoms.

    Numeric tokens become ``int`` or ``float``; everything else stays a ``str``.

    .. code-block:: python

        >>> parse_atoms('1920 notei 62')
        [1920, 'notei', 62]
    """
    return [_atom(token) for token in text.split()]
