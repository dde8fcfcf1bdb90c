import pytest

from seqmerge.batches import (BATCH_A, BATCH_B, BEAT, ConfigurationError,
                              event_from_config, load_batches, parse_batches)
from seqmerge.model import Event
from seqmerge.storeapi import MalformedEntry


_CONFIG = """
beat: 240
store: events02
batches:
  intro:
    - {at: 0, msg: [notei, 70]}
    - {beats: 4, msg: [notei, 72]}
  outro:
    - {beats: 16, msg: [notei, 60]}
"""


def test_builtin_batches():
    assert BEAT == 480.0
    assert [event.at for event in BATCH_A] == [0, 3840]
    assert [event.at for event in BATCH_B] == [1920, 5760]
    assert BATCH_A[0].msg == ('notei', 70)
    assert BATCH_B[0].msg == ('notei', 62)


def test_event_from_config():
    assert event_from_config({'at': 10, 'msg': ['x']}) == Event(10, ('x',))
    assert event_from_config({'beats': 2, 'msg': ['x']}, beat=100) == Event(200, ('x',))

    for item in (['x'], {'at': 1, 'beats': 1, 'msg': ['x']}, {'beats': 'two', 'msg': ['x']},
                 {'beats': 1}):
        with pytest.raises(MalformedEntry):
            event_from_config(item)


def test_parse_batches_defaults():
    config = parse_batches(None)

    assert config.beat == BEAT
    assert config.store == 'events01'
    assert config.batches == {}


def test_parse_batches_invalid():
    for data in ([], {'beat': 0}, {'beat': 'fast'}, {'store': ''}, {'batches': []},
                 {'batches': {'a': {'at': 0}}}):
        with pytest.raises(ConfigurationError):
            parse_batches(data)


def test_load_batches(tmp_path):
    path = tmp_path / 'batches.yaml'
    path.write_text(_CONFIG)

    config = load_batches(str(path))

    assert config.beat == 240.0
    assert config.store == 'events02'
    assert config.batches == {
        'intro': (Event(0, ('notei', 70)), Event(960, ('notei', 72))),
        'outro': (Event(3840, ('notei', 60)),),
    }


def test_load_batches_invalid_yaml(tmp_path):
    path = tmp_path / 'broken.yaml'
    path.write_text('batches: [intro\n')

    with pytest.raises(ConfigurationError):
        load_batches(str(path))
