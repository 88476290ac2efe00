"""Helper functions for the command line output"""

from transmission_bridge.schemas import TorrentStat
from transmission_bridge.torrent_clients.status import status_name


def humanize_bytes(num: float, kbytes: int = 1000, suffix: str = 'B') -> str:
    """Convert bytes to human readable format using the daemon's kilo unit"""
    for unit in ['', 'K', 'M', 'G', 'T', 'P', 'E', 'Z']:
        if abs(num) < kbytes:
            return f'{num:3.1f} {unit}{suffix}'
        num /= kbytes
    return f'{num:.1f} Y{suffix}'


def format_torrent_line(key: str, torrent: TorrentStat, kbytes: int = 1000) -> str:
    """Format a torrent stat as a single line"""
    speeds = (
        f'down {humanize_bytes(torrent["speedDown"], kbytes)}/s '
        f'up {humanize_bytes(torrent["speedUp"], kbytes)}/s'
    )
    line = (
        f'{torrent["rpcid"]:>4} {key[:8]} {status_name(torrent["status"]):<13} '
        f'{torrent["percentDone"]:5.1f}% {humanize_bytes(torrent["size"], kbytes):>10} {speeds}  {torrent["name"]}'
    )
    if torrent['error']:
        line += f'  [error {torrent["error"]}: {torrent["errorString"]}]'
    return line
