"""Typed shapes of RPC messages and normalized torrent records."""

from typing import Any, NotRequired, TypedDict


class RpcRequest(TypedDict):
    """Envelope sent to the daemon"""

    method: str
    arguments: dict[str, Any] | None


class RpcResponse(TypedDict):
    """Envelope returned by the daemon"""

    result: str
    arguments: NotRequired[dict[str, Any]]
    tag: NotRequired[int]


class TorrentStat(TypedDict):
    """Flattened torrent record, one per torrent in a torrent-get result"""

    rpcid: int
    name: str
    status: int
    running: bool
    size: float
    percentDone: float
    sharing: float
    seeds: int
    peers: int
    cons: int
    peersList: list[dict[str, Any]]
    files: list[dict[str, Any]]
    error: int
    errorString: str
    downloadDir: str
    downTotal: float
    upTotal: int
    eta: int
    speedDown: int
    speedUp: int
    drate: int
    urate: int
    seedlimit: int
    seedRatioLimit: int
    seedRatioMode: int
    trackerStats: list[dict[str, Any]]


class FilterCriteria(TypedDict, total=False):
    """Torrent list filter, a key set to None is ignored"""

    running: bool | None
    status: int | None
    speedUp: bool | None
    speedDown: bool | None
    speed: bool | None
