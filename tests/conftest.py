"""Pytest configuration and shared fixtures"""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import httpx
import pytest
from faker import Faker

from transmission_bridge.config import Settings
from transmission_bridge.torrent_clients.transmission import TransmissionClient

fake = Faker()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        host='localhost',
        port=9091,
        username='test',
        password='test',
        version='3.00 (bb6b5a062e)',
        kbytes=1000,
        log_level='DEBUG',
        timeout=5,
    )


@pytest.fixture
def rpc_response() -> Callable[..., Mock]:
    """Factory for mocked httpx responses"""

    def make(
        payload: Any = None, status_code: int = 200, text: str | None = None, headers: dict[str, str] | None = None
    ) -> Mock:
        response = Mock(spec=httpx.Response)
        response.status_code = status_code
        response.headers = headers or {}
        if payload is None:
            response.json.side_effect = json.JSONDecodeError('Expecting value', text or '', 0)
            response.text = text or ''
        else:
            response.json.return_value = payload
            response.text = text if text is not None else json.dumps(payload)
        return response

    return make


@pytest.fixture
def transmission_client(test_settings: Settings) -> TransmissionClient:
    """Transmission client with a mocked HTTP client and a known daemon version"""
    client = TransmissionClient(
        host=test_settings.host,
        port=test_settings.port,
        username=test_settings.username,
        password=test_settings.password,
        version=test_settings.version,
        kbytes=test_settings.kbytes,
    )
    client._client = Mock(spec=httpx.Client)
    return client


@pytest.fixture
def raw_torrent() -> Callable[..., dict[str, Any]]:
    """Factory for torrent-get records"""

    def make(**overrides: Any) -> dict[str, Any]:
        torrent = {
            'id': fake.random_int(min=1, max=500),
            'name': fake.file_name(extension='mkv'),
            'hashString': fake.sha1(),
            'status': 4,
            'totalSize': 2000,
            'downloadedEver': 1000,
            'uploadedEver': 300,
            'downloadLimit': 100,
            'uploadLimit': 50,
            'rateDownload': 2048,
            'rateUpload': 512,
            'peersConnected': 7,
            'peersGettingFromUs': 2,
            'peersSendingToUs': 5,
            'percentDone': 0.5,
            'uploadRatio': 0.3,
            'seedRatioLimit': 2,
            'seedRatioMode': 0,
            'downloadDir': '/downloads',
            'eta': 120,
            'peers': [{'address': '10.0.0.2', 'clientName': 'Transmission 3.00', 'rateToClient': 2048}],
            'files': [{'name': 'movie.mkv', 'length': 2000, 'bytesCompleted': 1000}],
            'error': 0,
            'errorString': '',
            'trackerStats': [{'host': 'http://tracker.example:80', 'seederCount': 12, 'leecherCount': 3}],
        }
        torrent.update(overrides)
        return torrent

    return make
