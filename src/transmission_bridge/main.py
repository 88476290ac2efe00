"""Main entry point for transmission-bridge"""

import argparse
import json
import logging
import sys

from transmission_bridge.config import settings
from transmission_bridge.helpers import format_torrent_line
from transmission_bridge.schemas import FilterCriteria, RpcResponse
from transmission_bridge.torrent_clients import TorrentClientError, TransmissionClient, get_torrent_client

logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(f'{settings.log_prefix}.main')

ID_COMMANDS = ('start', 'stop', 'verify', 'reannounce')


def torrent_id(value: str) -> int | str:
    """Torrent ids are numbers, anything else is taken as a hash"""
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Transmission RPC client')
    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('session', help='Show session variables')

    list_parser = commands.add_parser('list', help='List torrents')
    list_parser.add_argument('ids', nargs='*', type=torrent_id, help='Torrent ids or hashes, all when omitted')
    running = list_parser.add_mutually_exclusive_group()
    running.add_argument('--running', dest='running', action='store_const', const=True, help='Only running torrents')
    running.add_argument('--stopped', dest='running', action='store_const', const=False, help='Only stopped torrents')
    list_parser.add_argument('--status', type=int, help='Only torrents with this status code')
    list_parser.add_argument('--uploading', action='store_true', help='Only torrents with upload activity')
    list_parser.add_argument('--downloading', action='store_true', help='Only torrents with download activity')
    list_parser.add_argument('--active', action='store_true', help='Only torrents with any transfer activity')

    for name in ID_COMMANDS:
        id_parser = commands.add_parser(name, help=f'{name.capitalize()} torrents')
        id_parser.add_argument('ids', nargs='+', type=torrent_id, help='Torrent ids or hashes')

    add_parser = commands.add_parser('add', help='Add a torrent')
    add_parser.add_argument('torrent', help='Path, URL or magnet link of the torrent')
    add_parser.add_argument('--dir', default='', help='Download directory')
    add_parser.add_argument('--paused', action='store_true', help="Don't start the torrent")
    add_parser.add_argument('--metainfo', action='store_true', help='Upload the local .torrent file content')

    remove_parser = commands.add_parser('remove', help='Remove torrents')
    remove_parser.add_argument('ids', nargs='+', type=torrent_id, help='Torrent ids or hashes')
    remove_parser.add_argument('--delete-data', action='store_true', help='Also delete downloaded data')

    move_parser = commands.add_parser('move', help='Move torrent data')
    move_parser.add_argument('location', help='New location')
    move_parser.add_argument('ids', nargs='+', type=torrent_id, help='Torrent ids or hashes')
    move_parser.add_argument('--no-move', action='store_true', help='Look for the data in the new location instead')

    return parser


def _criteria(args: argparse.Namespace) -> FilterCriteria:
    criteria: FilterCriteria = {}
    if args.running is not None:
        criteria['running'] = args.running
    if args.status is not None:
        criteria['status'] = args.status
    if args.uploading:
        criteria['speedUp'] = True
    if args.downloading:
        criteria['speedDown'] = True
    if args.active:
        criteria['speed'] = True
    return criteria


def _report(response: RpcResponse) -> int:
    if response.get('result') == 'success':
        print('success')
        return 0
    print(response.get('result', 'unknown error'), file=sys.stderr)
    return 1


def run_command(client: TransmissionClient, args: argparse.Namespace) -> int:
    """Run a parsed command against the client"""
    if args.command == 'session':
        response = client.session_get()
        print(json.dumps(response.get('arguments', {}), indent=2, sort_keys=True))
        return 0 if response.get('result') == 'success' else 1

    if args.command == 'list':
        client.torrent_get_tf(args.ids)
        torrents = client.torrent_filter_tf(_criteria(args))
        kbytes = client.kbytes or 1000
        for key, torrent in torrents.items():
            print(format_torrent_line(key, torrent, kbytes))
        return 0

    if args.command in ID_COMMANDS:
        return _report(getattr(client, args.command)(args.ids))

    if args.command == 'add':
        options = {'paused': args.paused}
        if args.metainfo:
            return _report(client.add_metainfo(args.torrent, args.dir, options))
        return _report(client.add(args.torrent, args.dir, options))

    if args.command == 'remove':
        return _report(client.remove(args.ids, delete_local_data=args.delete_data))

    if args.command == 'move':
        return _report(client.move(args.ids, args.location, move_existing_data=not args.no_move))

    raise ValueError(f'Unknown command: {args.command}')


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)

    try:
        with get_torrent_client() as client:
            return run_command(client, args)
    except TorrentClientError as e:
        log.error('%s', e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
