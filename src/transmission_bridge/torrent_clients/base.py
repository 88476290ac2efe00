"""Base torrent client interface and errors"""

from abc import ABC, abstractmethod
from typing import Any

from transmission_bridge.schemas import RpcResponse

TorrentIds = int | str | list[int | str] | None


class TorrentClientError(Exception):
    """Base exception for torrent client errors"""


class DaemonUnreachableError(TorrentClientError):
    """No response was received from the daemon"""


class AuthenticationError(TorrentClientError):
    """Base exception for authentication failures"""


class AuthRejectedError(AuthenticationError):
    """The daemon answered with an 'Unauthorized' page"""


class AuthRequiredError(AuthenticationError):
    """The daemon requires credentials but none are configured"""


class AuthIncorrectError(AuthenticationError):
    """The configured credentials were refused"""


class HandshakeError(TorrentClientError):
    """Base exception for session id (CSRF token) failures"""


class HandshakeFailedError(HandshakeError):
    """A session id was required but could not be obtained"""


class SessionTokenMissingError(HandshakeFailedError):
    """The 409 challenge did not carry a session id"""


class TokenRejectedError(HandshakeError):
    """The session id was set but not accepted by the daemon"""


class InvalidResponseError(TorrentClientError):
    """The daemon answered with something that is not a JSON object"""


class TorrentClient(ABC):
    """Abstract base class for torrent clients"""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the torrent client"""

    @abstractmethod
    def close(self) -> None:
        """Close the connection to the torrent client"""

    @abstractmethod
    def request(self, method: str, arguments: dict[str, Any] | None = None) -> RpcResponse:
        """Send an RPC request

        Args:
            method: RPC method name, e.g. 'torrent-get'
            arguments: Method arguments, empty fields are dropped

        Returns:
            Decoded RPC response
        """

    @abstractmethod
    def start(self, ids: TorrentIds) -> RpcResponse:
        """Start one or more torrents"""

    @abstractmethod
    def stop(self, ids: TorrentIds) -> RpcResponse:
        """Stop one or more torrents"""

    @abstractmethod
    def reannounce(self, ids: TorrentIds) -> RpcResponse:
        """Reannounce one or more torrents"""

    @abstractmethod
    def verify(self, ids: TorrentIds) -> RpcResponse:
        """Verify one or more torrents"""

    @abstractmethod
    def get(self, ids: TorrentIds = None, fields: list[str] | None = None) -> RpcResponse:
        """Get information on torrents

        Args:
            ids: Torrent ids or hashes, all torrents when empty
            fields: Fields to return

        Returns:
            RPC response with the torrents under arguments['torrents']
        """

    @abstractmethod
    def set(self, ids: TorrentIds = None, arguments: dict[str, Any] | None = None) -> RpcResponse:
        """Set properties on one or more torrents"""

    @abstractmethod
    def add(
        self,
        torrent_location: str | None = None,
        save_path: str = '',
        extra_options: dict[str, Any] | None = None,
        metainfo: str | None = None,
    ) -> RpcResponse:
        """Add a torrent by file path, URL or magnet link, or by base64 encoded content"""

    @abstractmethod
    def remove(self, ids: TorrentIds, delete_local_data: bool = False) -> RpcResponse:
        """Remove one or more torrents

        Args:
            ids: Torrent ids or hashes
            delete_local_data: Whether to delete downloaded files too
        """

    @abstractmethod
    def move(self, ids: TorrentIds, target_location: str, move_existing_data: bool = True) -> RpcResponse:
        """Move torrent data to a new location

        Args:
            ids: Torrent ids or hashes
            target_location: New storage location
            move_existing_data: Move the existing data, or look for the data in the new location
        """
