"""Conversion of torrent-get records into flat torrent stats"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from transmission_bridge.schemas import TorrentStat

from .status import status_compat, status_to_running

# Fields requested for every torrent stat
TORRENT_STAT_FIELDS = [
    'id',
    'name',
    'status',
    'hashString',
    'totalSize',
    'downloadedEver',
    'uploadedEver',
    'downloadLimit',
    'uploadLimit',
    'rateDownload',
    'rateUpload',
    'peersConnected',
    'peersGettingFromUs',
    'peersSendingToUs',
    'percentDone',
    'uploadRatio',
    'seedRatioLimit',
    'seedRatioMode',
    'downloadDir',
    'eta',
    'peers',
    'files',
    'error',
    'errorString',
    'trackerStats',
]


def _round_half_up(value: float) -> int:
    """Round halves away from zero, 12.5 becomes 13"""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def rpc_to_tf(stat: dict[str, Any], recent_status: bool) -> TorrentStat:
    """Convert a single torrent-get record to a torrent stat

    Fields missing from the record (empty values are dropped by the result
    cleanup) take the zero value of their type.

    Args:
        stat: Torrent record from torrent-get
        recent_status: Whether the daemon uses the >= 2.40 status numbering

    Returns:
        Torrent stat
    """
    upload_ratio = stat.get('uploadRatio', 0)
    if upload_ratio == -1:
        upload_ratio = 0

    status = status_compat(stat.get('status', 0), recent_status)
    seed_ratio_limit = _round_half_up(float(stat.get('seedRatioLimit', 0)) * 100)

    torrent: TorrentStat = {
        'rpcid': stat.get('id', 0),
        'name': stat.get('name', ''),
        'status': status,
        'running': status_to_running(status),
        'size': float(stat.get('totalSize', 0)),
        'percentDone': float(stat.get('percentDone', 0)) * 100.0,
        'sharing': float(upload_ratio) * 100.0,
        'seeds': stat.get('peersSendingToUs', 0),
        'peers': stat.get('peersGettingFromUs', 0),
        'cons': stat.get('peersConnected', 0),
        'peersList': stat.get('peers', []),
        'files': stat.get('files', []),
        'error': stat.get('error', 0),
        'errorString': stat.get('errorString', ''),
        'downloadDir': stat.get('downloadDir', ''),
        'downTotal': stat.get('downloadedEver', 0),
        'upTotal': stat.get('uploadedEver', 0),
        'eta': stat.get('eta', 0),
        'speedDown': int(stat.get('rateDownload', 0)),
        'speedUp': int(stat.get('rateUpload', 0)),
        'drate': stat.get('downloadLimit', 0),
        'urate': stat.get('uploadLimit', 0),
        'seedlimit': seed_ratio_limit,
        'seedRatioLimit': seed_ratio_limit,
        'seedRatioMode': stat.get('seedRatioMode', 0),
        'trackerStats': stat.get('trackerStats', []),
    }

    # Daemons >= 2.40 may report less downloaded bytes than the size of a complete torrent
    if recent_status and torrent['percentDone'] == 100.0 and torrent['downTotal'] < torrent['size']:
        torrent['downTotal'] = torrent['size']

    return torrent
