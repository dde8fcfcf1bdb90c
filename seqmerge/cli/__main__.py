import logging
from sys import exit

from seqmerge.cli.parser import get_parent_parser
from seqmerge.cli.merge import get_parser as get_merge_parser, run_merge

parser = get_parent_parser('seqmerge', 'Merge timestamped event batches into a store')

subparsers = parser.add_subparsers(dest='command', title='command', help='CLI commands')
get_merge_parser(subparsers)

args = parser.parse_args()

if args.version:
    from seqmerge.metadata import version
    print('seqmerge', version)
    exit(0)

logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                    format='%(asctime)s %(levelname)s %(name)s: %(message)s')

if args.command == 'merge':
    run_merge(args)
else:
    parser.print_help()
