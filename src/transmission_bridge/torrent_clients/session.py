"""Session id handling for the Transmission CSRF protection"""

import logging
import re
from collections.abc import Mapping

from transmission_bridge.config import settings

from .base import SessionTokenMissingError

log = logging.getLogger(f'{settings.log_prefix}.session')

SESSION_ID_HEADER = 'X-Transmission-Session-Id'

_TOKEN_RE = re.compile(r'[A-Za-z0-9]+')


class SessionHandshake:
    """Holds the session id negotiated with the daemon

    The daemon answers the first request with a 409 carrying the session id,
    which must be sent with every following request. The id is captured once,
    a client never replaces a session id it already holds.
    """

    def __init__(self) -> None:
        self.token = ''

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def current_token(self) -> str:
        return self.token

    def capture_from_challenge(self, headers: Mapping[str, str]) -> str:
        """Store the session id found in a 409 response

        Args:
            headers: Response headers

        Returns:
            Captured session id

        Raises:
            SessionTokenMissingError: No session id header in the response
        """
        match = _TOKEN_RE.match(headers.get(SESSION_ID_HEADER, '').strip())
        if match:
            self.token = match.group(0)
            log.debug('Captured session id %s', self.token)
            return self.token

        raise SessionTokenMissingError('Needed a session id but could not find one')
