"""Torrent client abstraction layer"""

from .base import (
    AuthenticationError,
    AuthIncorrectError,
    AuthRejectedError,
    AuthRequiredError,
    DaemonUnreachableError,
    HandshakeError,
    HandshakeFailedError,
    InvalidResponseError,
    SessionTokenMissingError,
    TokenRejectedError,
    TorrentClient,
    TorrentClientError,
)
from .factory import get_torrent_client
from .filters import filter_torrents
from .mapper import rpc_to_tf
from .status import status_compat, status_to_running
from .transmission import TransmissionClient

__all__ = [
    'AuthIncorrectError',
    'AuthRejectedError',
    'AuthRequiredError',
    'AuthenticationError',
    'DaemonUnreachableError',
    'HandshakeError',
    'HandshakeFailedError',
    'InvalidResponseError',
    'SessionTokenMissingError',
    'TokenRejectedError',
    'TorrentClient',
    'TorrentClientError',
    'TransmissionClient',
    'filter_torrents',
    'get_torrent_client',
    'rpc_to_tf',
    'status_compat',
    'status_to_running',
]
