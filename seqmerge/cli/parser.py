"""
-------------------
seqmerge.cli.parser
-------------------


seqmerge CLI main :mod:`argparse` parser.
"""
import argparse


def get_parent_parser(name, desc=''):
    """Creates the main (parent) :class:`argparse.ArgumentParser` for the seqmerge CLI.

    Defines the main argument options: version and verbosity level.

    :param str name: the name of the program.
    :param str desc: program description.

    Returns the configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(prog=name, description=desc)

    parser.add_argument('-v', '--version',
                        help='Print program version and exit', action='store_true')
    parser.add_argument('--verbose', dest='verbose', action='store_true',
                        help='Verbose output.')

    return parser
