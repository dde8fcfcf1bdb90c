import importlib
import io
import logging
import sys
from unittest import mock

import seqmerge.cli.merge
from seqmerge.metadata import version


def _import_main():
    if 'seqmerge.cli.__main__' in sys.modules:
        del sys.modules['seqmerge.cli.__main__']
    importlib.import_module('seqmerge.cli.__main__')


@mock.patch.object(sys, 'exit')
@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_cli_main_version(fake_out, m_exit):
    m_exit.side_effect = Exception('EXIT')
    with mock.patch.object(sys, 'argv', ['seqmerge', '-v']):
        try:
            _import_main()
        except Exception as e:
            assert str(e) == 'EXIT'

    assert fake_out.getvalue() == 'seqmerge %s\n' % version
    m_exit.assert_called_once_with(0)


@mock.patch.object(logging, 'basicConfig')
@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_cli_main_verbose(fake_out, m_basicConfig):
    with mock.patch.object(sys, 'argv', ['seqmerge', '--verbose']):
        _import_main()

    assert m_basicConfig.call_count == 1
    assert m_basicConfig.call_args[1]['level'] == logging.DEBUG
    assert 'usage' in fake_out.getvalue()


@mock.patch.object(logging, 'basicConfig')
@mock.patch.object(seqmerge.cli.merge, 'run_merge')
def test_cli_main_command_merge(m_run_merge, m_basicConfig):
    with mock.patch.object(sys, 'argv', ['seqmerge', 'merge', 'a']):
        _import_main()

    assert m_run_merge.call_count == 1
    assert m_run_merge.call_args[0][0].batches == ['a']
    assert m_basicConfig.call_args[1]['level'] == logging.WARNING
