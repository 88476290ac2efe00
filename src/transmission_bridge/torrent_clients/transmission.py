"""Transmission torrent client implementation"""

import base64
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from transmission_bridge.config import settings
from transmission_bridge.schemas import FilterCriteria, RpcRequest, RpcResponse, TorrentStat
from transmission_bridge.utils.payload import clean_request_data, clean_result_data

from .base import (
    AuthIncorrectError,
    AuthRejectedError,
    AuthRequiredError,
    DaemonUnreachableError,
    InvalidResponseError,
    TokenRejectedError,
    TorrentClient,
    TorrentIds,
)
from .filters import filter_torrents
from .mapper import TORRENT_STAT_FIELDS, rpc_to_tf
from .session import SESSION_ID_HEADER, SessionHandshake
from .status import is_recent_version

log = logging.getLogger(f'{settings.log_prefix}.transmission')

DEFAULT_GET_FIELDS = ['id', 'name', 'status', 'doneDate', 'haveValid', 'totalSize']
SESSION_INFO_FIELDS = ['version', 'rpc-version', 'units']


class TransmissionClient(TorrentClient):
    """Transmission RPC client implementation using httpx

    The daemon version is learned on connect, unless both version and kbytes
    are given, and decides how status codes are translated for the lifetime
    of the client.
    """

    def __init__(
        self,
        host: str = '127.0.0.1',
        port: int = 9091,
        username: str | None = None,
        password: str | None = None,
        *,
        scheme: str = 'http',
        rpc_path: str = '/transmission/rpc',
        timeout: float = 30.0,
        connect_timeout: float = 1.0,
        max_redirects: int = 2,
        version: str | None = None,
        kbytes: int | None = None,
    ):
        self.url = f'{scheme}://{host}:{port}{rpc_path}'
        self.username = username or ''
        self.password = password or ''
        self.auth = httpx.BasicAuth(self.username, self.password) if self.username else None
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.max_redirects = max_redirects

        self.version = version
        self.rpc_version: int | None = None
        self.kbytes = kbytes
        self.recent_status = is_recent_version(version)
        self._negotiated = version is not None and kbytes is not None

        self.last_error = ''
        self.session: RpcResponse | None = None
        self.torrents: dict[str, TorrentStat] = {}
        self.filter: FilterCriteria | None = None

        self._handshake = SessionHandshake()
        self._client: httpx.Client | None = None

    def __enter__(self) -> 'TransmissionClient':
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def session_id(self) -> str:
        """Session id currently sent with every request"""
        return self._handshake.current_token()

    def connect(self) -> None:
        """Open the HTTP client and learn the daemon version and units"""
        if self._client is None:
            self._client = httpx.Client(
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
                max_redirects=self.max_redirects,
            )

        if not self._negotiated:
            self._negotiate()

    def close(self) -> None:
        """Close the HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def _negotiate(self) -> None:
        response = self.session_get(SESSION_INFO_FIELDS)
        arguments = response.get('arguments') or {}

        if self.version is None:
            self.version = arguments.get('version')
        if self.kbytes is None:
            self.kbytes = (arguments.get('units') or {}).get('size-bytes')
        self.rpc_version = arguments.get('rpc-version')
        self.recent_status = is_recent_version(self.version)
        self._negotiated = True

        log.info(
            'Transmission %s (rpc %s) at %s, %s bytes per kilobyte, recent status codes: %s',
            self.version,
            self.rpc_version,
            self.url,
            self.kbytes,
            self.recent_status,
        )

    def request(self, method: str, arguments: dict[str, Any] | None = None) -> RpcResponse:
        """Send an RPC request to Transmission

        A 409 answer to a client without a session id is the CSRF challenge:
        the session id is captured and the request is sent once more. A 409
        while a session id is held means the daemon rejected it.

        Args:
            method: RPC method name
            arguments: Method arguments, empty fields are dropped

        Returns:
            Decoded response. A result other than 'success' is returned too and
            kept in last_error.

        Raises:
            DaemonUnreachableError: No response from the daemon
            AuthenticationError: Credentials missing or refused
            HandshakeError: Session id missing or rejected
            InvalidResponseError: Response is not a JSON object
        """
        if self._client is None:
            self.connect()

        assert self._client is not None  # Ensured by connect()

        cleaned = clean_request_data(arguments)
        data: RpcRequest = {'method': method, 'arguments': cleaned}

        headers = {}
        if self._handshake.has_token:
            headers[SESSION_ID_HEADER] = self._handshake.current_token()

        log.debug('RPC request %s %s', method, cleaned)
        try:
            response = self._client.post(self.url, json=data, headers=headers)
        except httpx.TransportError as e:
            raise DaemonUnreachableError(
                f'The Transmission server at {self.url} did not respond. '
                'Please make sure Transmission is running and the web client is enabled'
            ) from e

        if 'Unauthorized' in response.text:
            raise AuthRejectedError(f'Bad Transmission RPC authentication information: {response.text}')

        if response.status_code == 409:
            if not self._handshake.has_token:
                self._handshake.capture_from_challenge(response.headers)
                return self.request(method, cleaned)
            raise TokenRejectedError(
                f"Session id '{self._handshake.current_token()}' was found and set but not accepted by Transmission"
            )

        if response.status_code == 401:
            if not self.username:
                raise AuthRequiredError(f'The Transmission web client at {self.url} needs authentication')
            raise AuthIncorrectError(
                f'The Transmission web client at {self.url} needs authentication, '
                'the username and password you provided seem to be incorrect'
            )

        try:
            result = response.json()
        except ValueError as e:
            raise InvalidResponseError(f'Transmission returned a non JSON response ({response.status_code})') from e

        if not isinstance(result, dict):
            raise InvalidResponseError(f'Transmission returned {type(result).__name__} instead of an object')

        if result.get('result') != 'success':
            self.last_error = json.dumps(result)
            log.warning('RPC request %s failed: %s', method, result.get('result'))

        return result  # type: ignore[return-value]

    @staticmethod
    def _ids(ids: TorrentIds) -> list[int | str]:
        if ids is None:
            return []
        if isinstance(ids, list | tuple):
            return list(ids)
        return [ids]

    def start(self, ids: TorrentIds) -> RpcResponse:
        """Start one or more torrents"""
        return self.request('torrent-start', {'ids': self._ids(ids)})

    def stop(self, ids: TorrentIds) -> RpcResponse:
        """Stop one or more torrents"""
        return self.request('torrent-stop', {'ids': self._ids(ids)})

    def reannounce(self, ids: TorrentIds) -> RpcResponse:
        """Reannounce one or more torrents"""
        return self.request('torrent-reannounce', {'ids': self._ids(ids)})

    def verify(self, ids: TorrentIds) -> RpcResponse:
        """Verify one or more torrents"""
        return self.request('torrent-verify', {'ids': self._ids(ids)})

    def get(self, ids: TorrentIds = None, fields: list[str] | None = None) -> RpcResponse:
        """Get information on torrents, all torrents when ids is empty

        Default fields are: id, name, status, doneDate, haveValid, totalSize.
        """
        return self.request(
            'torrent-get',
            {
                'fields': fields or DEFAULT_GET_FIELDS,
                'ids': self._ids(ids),
            },
        )

    def set(self, ids: TorrentIds = None, arguments: dict[str, Any] | None = None) -> RpcResponse:
        """Set properties on one or more torrents

        Available fields:
            bandwidthPriority     number   this torrent's bandwidth priority
            downloadLimit         number   maximum download speed (KBps)
            downloadLimited       boolean  true if downloadLimit is honored
            files-wanted          array    indices of file(s) to download
            files-unwanted        array    indices of file(s) to not download
            honorsSessionLimits   boolean  true if session upload limits are honored
            location              string   new location of the torrent's content
            peer-limit            number   maximum number of peers
            priority-high         array    indices of high-priority file(s)
            priority-low          array    indices of low-priority file(s)
            priority-normal       array    indices of normal-priority file(s)
            queuePosition         number   position of this torrent in its queue
            seedIdleLimit         number   minutes of seeding inactivity
            seedIdleMode          number   which seeding inactivity limit to use
            seedRatioLimit        double   torrent-level seeding ratio
            seedRatioMode         number   which ratio limit to use
            trackerAdd            array    announce URLs to add
            trackerRemove         array    ids of trackers to remove
            trackerReplace        array    pairs of tracker id and new announce URL
            uploadLimit           number   maximum upload speed (KBps)
            uploadLimited         boolean  true if uploadLimit is honored

        An 'ids' key in arguments takes precedence over the ids parameter.
        """
        request = dict(arguments or {})
        request.setdefault('ids', self._ids(ids))
        return self.request('torrent-set', request)

    def add(
        self,
        torrent_location: str | None = None,
        save_path: str = '',
        extra_options: dict[str, Any] | None = None,
        metainfo: str | None = None,
    ) -> RpcResponse:
        """Add a torrent

        Args:
            torrent_location: Path, URL or magnet link of the torrent
            save_path: Folder to download the torrent to
            extra_options: Other torrent-add arguments, e.g. paused, peer-limit,
                bandwidthPriority, files-wanted, files-unwanted, priority-high,
                priority-low, priority-normal
            metainfo: Base64 encoded .torrent content

        Raises:
            ValueError: Neither or both of torrent_location and metainfo given
        """
        options = dict(extra_options or {})
        location = torrent_location or options.pop('filename', None)
        metainfo = metainfo or options.pop('metainfo', None)
        if bool(location) == bool(metainfo):
            raise ValueError('Either a torrent location or metainfo must be given, not both')

        options['download-dir'] = save_path
        if location:
            options['filename'] = location
        else:
            options['metainfo'] = metainfo

        return self.request('torrent-add', options)

    def add_metainfo(
        self, torrent: bytes | str | Path, save_path: str = '', extra_options: dict[str, Any] | None = None
    ) -> RpcResponse:
        """Add a torrent from .torrent content or a local .torrent file

        Args:
            torrent: Raw .torrent content, or path to a .torrent file
            save_path: Folder to download the torrent to
            extra_options: Other torrent-add arguments
        """
        content = torrent if isinstance(torrent, bytes) else Path(torrent).read_bytes()
        metainfo = base64.b64encode(content).decode('ascii')
        return self.add(save_path=save_path, extra_options=extra_options, metainfo=metainfo)

    def remove(self, ids: TorrentIds, delete_local_data: bool = False) -> RpcResponse:
        """Remove one or more torrents, optionally with their data"""
        return self.request(
            'torrent-remove',
            {
                'ids': self._ids(ids),
                'delete-local-data': delete_local_data,
            },
        )

    def move(self, ids: TorrentIds, target_location: str, move_existing_data: bool = True) -> RpcResponse:
        """Move torrent data, or scan the new location for it when move_existing_data is False"""
        return self.request(
            'torrent-set-location',
            {
                'ids': self._ids(ids),
                'location': target_location,
                'move': move_existing_data,
            },
        )

    def session_get(self, fields: list[str] | None = None) -> RpcResponse:
        """Get session variables"""
        self.session = self.request('session-get', {'fields': fields} if fields else None)
        return self.session

    def session_set(self, arguments: Mapping[str, Any] | None) -> RpcResponse:
        """Set session variables"""
        if not isinstance(arguments, Mapping):
            arguments = {}
        return self.request('session-set', dict(arguments))

    def is_running(self) -> bool:
        """Check whether the daemon answers session-get with success"""
        session = self.session_get()
        return session.get('result') == 'success'

    def torrent_get_tf(self, ids: TorrentIds = None) -> dict[str, TorrentStat]:
        """Get torrents as torrent stats keyed by hash

        The result is also kept in self.torrents for torrent_filter_tf.
        """
        if self._client is None or not self._negotiated:
            self.connect()

        self.torrents = {}
        response = self.get(ids, TORRENT_STAT_FIELDS)
        if response.get('result') != 'success':
            return self.torrents

        result = clean_result_data(response.get('arguments') or {})
        torrents = result.get('torrents', []) if isinstance(result, dict) else []
        for stat in torrents:
            self.torrents[stat['hashString']] = rpc_to_tf(stat, self.recent_status)

        log.debug('Fetched %d torrents', len(self.torrents))
        return self.torrents

    def torrent_filter_tf(self, criteria: FilterCriteria | None = None) -> Mapping[str, TorrentStat]:
        """Filter the torrents of the last torrent_get_tf call, by self.filter when no criteria are given"""
        if criteria is None:
            criteria = self.filter
        return filter_torrents(self.torrents, criteria)
