from typing import Any, Optional

STREAM_OFFLINE_MARKER = 'channel must be live'


class ClipRelayError(Exception):
    """Base class for errors raised while relaying a clip request"""
    pass


class ConfigurationError(ClipRelayError):
    """A required Twitch credential or identifier is missing"""
    pass


class AuthorizationError(ClipRelayError):
    """The caller's user/role combination is not allowed to clip"""
    pass


class TwitchAPIError(Exception):
    """Twitch answered with a status the client does not treat as success"""

    def __init__(self, status_code: int, payload: Any = None, reason: str = ''):
        self.status_code = status_code
        self.payload = payload
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}" if reason else f"HTTP {status_code}")

    @property
    def upstream_message(self) -> str:
        if isinstance(self.payload, dict):
            message = self.payload.get('message')
            if isinstance(message, str):
                return message
        return ''


class UpstreamError(ClipRelayError):
    """Clip creation failed on the Twitch side"""

    def __init__(self, message: str = '', status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamAuthError(UpstreamError):
    """Twitch rejected the credentials (401)"""
    pass


class UpstreamTransientError(UpstreamError):
    """The channel cannot be clipped right now, usually because it is offline"""
    pass


class UpstreamGenericError(UpstreamError):
    """Any other non-success status, malformed response or network failure"""
    pass


class LookupSoftFailure(ClipRelayError):
    """Resolving the clip URL after creation failed; never shown to the caller"""
    pass


def classify_upstream_error(exc: Exception) -> UpstreamError:
    """Map a failure from the create-clip call to the upstream error taxonomy.

    401 means the stored token is bad, 403 or a "channel must be live" payload
    means the stream is offline, everything else is generic.
    """
    if isinstance(exc, UpstreamError):
        return exc

    if isinstance(exc, TwitchAPIError):
        if exc.status_code == 401:
            return UpstreamAuthError(str(exc), status_code=401)
        if exc.status_code == 403:
            return UpstreamTransientError(str(exc), status_code=403)
        if STREAM_OFFLINE_MARKER in exc.upstream_message:
            return UpstreamTransientError(exc.upstream_message, status_code=exc.status_code)
        return UpstreamGenericError(str(exc), status_code=exc.status_code)

    return UpstreamGenericError(str(exc))
