from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

CLIP_URL_TEMPLATE = 'https://clips.twitch.tv/{clip_id}'

MESSAGE_CREATED = '✅ Clip created! {url}'
MESSAGE_UNAUTHORIZED = '❌ Only moderators, VIPs, and the broadcaster can create clips.'
MESSAGE_CONFIG_ERROR = '❌ Server configuration error. Please contact the streamer.'
MESSAGE_AUTH_FAILED = '❌ Authentication failed. Please contact the streamer.'
MESSAGE_STREAM_OFFLINE = '❌ Stream must be live to create clips!'
MESSAGE_GENERIC_ERROR = '❌ Failed to create clip. The stream might be offline or there was an API issue.'


def fallback_clip_url(clip_id: str) -> str:
    return CLIP_URL_TEMPLATE.format(clip_id=clip_id)


class ResultKind(Enum):
    CREATED = 'created'
    UNAUTHORIZED = 'unauthorized'
    CONFIG_ERROR = 'config_error'
    UPSTREAM_ERROR = 'upstream_error'


class UpstreamErrorKind(Enum):
    AUTHENTICATION = 'authentication'
    STREAM_OFFLINE = 'stream_offline'
    GENERIC = 'generic'


_UPSTREAM_MESSAGES = {
    UpstreamErrorKind.AUTHENTICATION: MESSAGE_AUTH_FAILED,
    UpstreamErrorKind.STREAM_OFFLINE: MESSAGE_STREAM_OFFLINE,
    UpstreamErrorKind.GENERIC: MESSAGE_GENERIC_ERROR,
}


@dataclass(frozen=True)
class ClipRequest:
    """Who asked for the clip, as reported by the chat bot"""

    user: str = 'unknown'
    role: str = 'viewer'

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> 'ClipRequest':
        # Empty query values count as absent
        return cls(
            user=args.get('user') or 'unknown',
            role=args.get('role') or 'viewer',
        )


@dataclass(frozen=True)
class UpstreamClip:
    """A clip descriptor as returned by the Helix clips endpoints"""

    id: str
    url: Optional[str] = None
    edit_url: Optional[str] = None

    @classmethod
    def from_helix(cls, data: Dict[str, Any]) -> 'UpstreamClip':
        return cls(
            id=data['id'],
            url=data.get('url') or None,
            edit_url=data.get('edit_url') or None,
        )

    @property
    def resolved_url(self) -> str:
        return self.url or fallback_clip_url(self.id)


@dataclass(frozen=True)
class ClipResult:
    """Outcome of one clip request.

    Built per request, rendered into the HTTP response and then discarded.
    """

    kind: ResultKind
    url: Optional[str] = None
    error_kind: Optional[UpstreamErrorKind] = None
    status_code: Optional[int] = None

    @classmethod
    def created(cls, url: str) -> 'ClipResult':
        return cls(ResultKind.CREATED, url=url)

    @classmethod
    def unauthorized(cls) -> 'ClipResult':
        return cls(ResultKind.UNAUTHORIZED)

    @classmethod
    def config_error(cls) -> 'ClipResult':
        return cls(ResultKind.CONFIG_ERROR)

    @classmethod
    def upstream_error(cls, error_kind: UpstreamErrorKind, status_code: Optional[int] = None) -> 'ClipResult':
        return cls(ResultKind.UPSTREAM_ERROR, error_kind=error_kind, status_code=status_code)

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.CREATED

    @property
    def message(self) -> str:
        if self.kind is ResultKind.CREATED:
            return MESSAGE_CREATED.format(url=self.url)
        if self.kind is ResultKind.UNAUTHORIZED:
            return MESSAGE_UNAUTHORIZED
        if self.kind is ResultKind.CONFIG_ERROR:
            return MESSAGE_CONFIG_ERROR
        return _UPSTREAM_MESSAGES.get(self.error_kind, MESSAGE_GENERIC_ERROR)

    @property
    def http_status(self) -> int:
        # The bot only displays 200 bodies, so clip errors stay 200
        return 500 if self.kind is ResultKind.CONFIG_ERROR else 200

    def to_dict(self) -> Dict[str, Any]:
        return {'message': self.message}
