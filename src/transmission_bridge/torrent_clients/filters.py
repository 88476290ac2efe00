"""Filtering of torrent stat collections"""

from collections.abc import Mapping

from transmission_bridge.schemas import FilterCriteria, TorrentStat


def filter_torrents(
    torrents: Mapping[str, TorrentStat], criteria: FilterCriteria | None = None
) -> Mapping[str, TorrentStat]:
    """Filter torrent stats

    Criteria are checked in the order running, status, speedUp, speedDown,
    speed. Every criterion that is set replaces the decision of the ones before
    it, so the last one decides whether a torrent is kept.

    Args:
        torrents: Torrent stats keyed by hash
        criteria: Filter to apply

    Returns:
        Kept torrent stats, or the input itself when no criteria are given
    """
    if not criteria:
        return torrents

    kept: dict[str, TorrentStat] = {}
    for key, torrent in torrents.items():
        drop = False
        if criteria.get('running') is not None:
            drop = torrent['running'] != criteria['running']
        if criteria.get('status') is not None:
            drop = torrent['status'] != criteria['status']
        if criteria.get('speedUp') is not None:
            drop = torrent['speedUp'] == 0
        if criteria.get('speedDown') is not None:
            drop = torrent['speedDown'] == 0
        if criteria.get('speed') is not None:
            drop = torrent['speedUp'] == 0 and torrent['speedDown'] == 0

        if not drop:
            kept[key] = torrent

    return kept
