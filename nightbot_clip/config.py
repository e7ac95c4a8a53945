import os
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

TWITCH_API_BASE = 'https://api.twitch.tv/helix'

RESPONSE_FORMATS = ('text', 'json')
AUTH_MODES = ('legacy', 'strict')


def _env_str(environ: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_int(environ: Mapping[str, str], key: str, default: int, minimum: int = 0) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {key}: {raw!r}, using {default}")
        return default
    if value < minimum:
        logger.warning(f"{key}={value} is below {minimum}, using {default}")
        return default
    return value


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {key}: {raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{key} must be positive, using {default}")
        return default
    return value


def _env_choice(environ: Mapping[str, str], key: str, choices, default: str) -> str:
    raw = _env_str(environ, key)
    if raw is None:
        return default
    value = raw.lower()
    if value not in choices:
        logger.warning(f"Unknown {key}={raw!r}, expected one of {', '.join(choices)}; using {default}")
        return default
    return value


@dataclass(frozen=True)
class RelayConfig:
    """Process-wide settings, read once at startup and never mutated."""

    client_id: Optional[str] = None
    access_token: Optional[str] = None
    broadcaster_id: Optional[str] = None
    channel_name: Optional[str] = None
    port: int = 3000
    response_format: str = 'text'
    auth_mode: str = 'legacy'
    resolve_delay_ms: int = 5000
    lookup_attempts: int = 1
    request_timeout: float = 10.0
    twitch_api_base: str = TWITCH_API_BASE
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'RelayConfig':
        """Build the config from environment variables.

        Missing credentials are not an error here; they are reported by
        ``/status`` and short-circuit ``/clip`` with a configuration error.
        """
        if environ is None:
            environ = os.environ

        return cls(
            client_id=_env_str(environ, 'CLIENT_ID'),
            access_token=_env_str(environ, 'ACCESS_TOKEN'),
            broadcaster_id=_env_str(environ, 'BROADCASTER_ID'),
            channel_name=_env_str(environ, 'CHANNEL_NAME'),
            port=_env_int(environ, 'PORT', 3000, minimum=1),
            response_format=_env_choice(environ, 'RESPONSE_FORMAT', RESPONSE_FORMATS, 'text'),
            auth_mode=_env_choice(environ, 'CLIP_AUTH_MODE', AUTH_MODES, 'legacy'),
            resolve_delay_ms=_env_int(environ, 'CLIP_RESOLVE_DELAY_MS', 5000),
            lookup_attempts=_env_int(environ, 'CLIP_LOOKUP_ATTEMPTS', 1, minimum=1),
            request_timeout=_env_float(environ, 'TWITCH_REQUEST_TIMEOUT', 10.0),
            twitch_api_base=(_env_str(environ, 'TWITCH_API_BASE', TWITCH_API_BASE)).rstrip('/'),
            log_level=(_env_str(environ, 'LOG_LEVEL', 'INFO')).upper(),
        )

    def missing_credentials(self) -> List[str]:
        missing = []
        if not self.client_id:
            missing.append('CLIENT_ID')
        if not self.access_token:
            missing.append('ACCESS_TOKEN')
        if not self.broadcaster_id:
            missing.append('BROADCASTER_ID')
        return missing

    @property
    def has_credentials(self) -> bool:
        return not self.missing_credentials()

    @property
    def resolve_delay(self) -> float:
        """Post-creation wait budget in seconds."""
        return self.resolve_delay_ms / 1000.0
