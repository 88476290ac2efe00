"""Factory for creating torrent client instances"""

from transmission_bridge.config import Settings, settings

from .transmission import TransmissionClient


def get_torrent_client(config: Settings | None = None) -> TransmissionClient:
    """Get torrent client instance based on configuration

    Args:
        config: Settings to use, the global settings by default

    Returns:
        TransmissionClient instance
    """
    config = config or settings
    return TransmissionClient(
        host=config.host,
        port=config.port,
        username=config.username,
        password=config.password,
        scheme=config.scheme,
        rpc_path=config.rpc_path,
        timeout=config.timeout,
        connect_timeout=config.connect_timeout,
        max_redirects=config.max_redirects,
        version=config.version,
        kbytes=config.kbytes,
    )
