import logging
from typing import Any, Dict, List, Optional

import requests

from .config import RelayConfig
from .errors import TwitchAPIError, UpstreamGenericError
from .models.clips import UpstreamClip

logger = logging.getLogger(__name__)

CREATE_SUCCESS_CODES = (200, 202)


def _decode_payload(response):
    try:
        return response.json()
    except ValueError:
        return response.text


class TwitchClient:
    """Thin wrapper around the Helix endpoints the relay needs.

    Holds no mutable state, so one instance is shared by every request thread.
    """

    def __init__(self, client_id: str, access_token: str,
                 api_base: str = 'https://api.twitch.tv/helix', timeout: float = 10.0):
        self.client_id = client_id
        self.access_token = access_token
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: RelayConfig) -> 'TwitchClient':
        return cls(
            client_id=config.client_id,
            access_token=config.access_token,
            api_base=config.twitch_api_base,
            timeout=config.request_timeout,
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            'Client-ID': self.client_id,
            'Authorization': f'Bearer {self.access_token}'
        }

    def create_clip(self, broadcaster_id: str) -> UpstreamClip:
        """Start a clip of the broadcaster's live stream.

        Twitch answers 202 while the clip is still processing. Raises
        TwitchAPIError for any other status and UpstreamGenericError when the
        response carries no clip descriptor.
        """
        response = requests.post(
            f'{self.api_base}/clips',
            params={'broadcaster_id': broadcaster_id},
            headers=self.headers,
            timeout=self.timeout
        )
        logger.info(f"📊 Twitch API response status: {response.status_code}")

        if response.status_code not in CREATE_SUCCESS_CODES:
            raise TwitchAPIError(response.status_code, _decode_payload(response), response.reason or '')

        clips = self._data(response)
        if not clips or not clips[0].get('id'):
            raise UpstreamGenericError('Create clip response did not contain a clip id',
                                       status_code=response.status_code)
        return UpstreamClip.from_helix(clips[0])

    def get_clip(self, clip_id: str) -> Optional[UpstreamClip]:
        """Look up a clip by id, None if Twitch does not know it (yet)."""
        response = requests.get(
            f'{self.api_base}/clips',
            params={'id': clip_id},
            headers=self.headers,
            timeout=self.timeout
        )
        if response.status_code != 200:
            raise TwitchAPIError(response.status_code, _decode_payload(response), response.reason or '')

        clips = self._data(response)
        if not clips:
            return None
        return UpstreamClip.from_helix(clips[0])

    def get_users(self) -> List[Dict[str, Any]]:
        """Fetch the user owning the token, used as a connectivity probe."""
        response = requests.get(
            f'{self.api_base}/users',
            headers=self.headers,
            timeout=self.timeout
        )
        if response.status_code != 200:
            raise TwitchAPIError(response.status_code, _decode_payload(response), response.reason or '')
        return self._data(response)

    @staticmethod
    def _data(response) -> List[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError:
            return []
        if not isinstance(body, dict):
            return []
        data = body.get('data')
        return data if isinstance(data, list) else []
