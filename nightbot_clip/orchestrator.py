import time
import logging
from typing import Callable, Optional

from .config import RelayConfig
from .errors import (
    AuthorizationError,
    ConfigurationError,
    LookupSoftFailure,
    UpstreamAuthError,
    UpstreamTransientError,
    classify_upstream_error,
)
from .models.clips import (
    ClipRequest,
    ClipResult,
    UpstreamErrorKind,
    fallback_clip_url,
)
from .twitch_client import TwitchClient
from .utils.retry_decorator import poll_within_budget

logger = logging.getLogger(__name__)

# Matched case-sensitively against the role the bot sends
ALLOWED_ROLES = frozenset(['mod', 'moderator', 'broadcaster', 'vip', 'owner'])


def is_channel_owner(user: str, channel_name: Optional[str]) -> bool:
    if not channel_name:
        return False
    return user.lower() == channel_name.lower()


def is_authorized(request: ClipRequest, config: RelayConfig) -> bool:
    """Decide whether a request may create a clip.

    ``legacy`` mode rejects only an owner whose role is also an allowed role
    and lets everyone else through. ``strict`` mode allows allowed roles and
    the owner, nobody else.
    """
    role_allowed = request.role in ALLOWED_ROLES
    owner = is_channel_owner(request.user, config.channel_name)

    if config.auth_mode == 'strict':
        return role_allowed or owner
    return not (role_allowed and owner)


class ClipOrchestrator:
    """Runs one clip request against Twitch and turns the outcome into a ClipResult."""

    def __init__(self, config: RelayConfig, client: Optional[TwitchClient] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self._client = client
        self.sleep = sleep

    @property
    def client(self) -> TwitchClient:
        if self._client is None:
            self._client = TwitchClient.from_config(self.config)
        return self._client

    def create_clip(self, request: ClipRequest) -> ClipResult:
        logger.info(f"🎬 Clip request from: {request.user}, role: {request.role}")

        try:
            self._check_config()
            self._authorize(request)
        except ConfigurationError as e:
            logger.error(f"Missing environment variables: {e}")
            return ClipResult.config_error()
        except AuthorizationError as e:
            logger.info(f"Rejected clip request: {e}")
            return ClipResult.unauthorized()

        try:
            logger.info("📡 Creating clip via Twitch API...")
            clip = self.client.create_clip(self.config.broadcaster_id)
        except Exception as e:
            return self._upstream_failure(e)

        logger.info(f"📹 Clip ID: {clip.id}")
        url = self._resolve_url(clip.id)
        logger.info(f"✅ Clip created successfully: {url}")
        return ClipResult.created(url)

    def _check_config(self):
        missing = self.config.missing_credentials()
        if missing:
            raise ConfigurationError(', '.join(missing))

    def _authorize(self, request: ClipRequest):
        if not is_authorized(request, self.config):
            raise AuthorizationError(f"user={request.user} role={request.role} mode={self.config.auth_mode}")

    def _resolve_url(self, clip_id: str) -> str:
        """Wait for Twitch to process the clip, then fetch its URL.

        The clip already exists at this point, so any failure here falls back
        to the predictable clips.twitch.tv URL instead of failing the request.
        """
        logger.info("⏳ Waiting for clip to process...")
        lookup = poll_within_budget(
            attempts=self.config.lookup_attempts,
            total_delay=self.config.resolve_delay,
            sleep=self.sleep
        )(self.client.get_clip)

        try:
            clip = lookup(clip_id)
            if clip is None:
                raise LookupSoftFailure(f"No clip data returned for {clip_id}")
        except Exception as e:
            basic_url = fallback_clip_url(clip_id)
            logger.warning(f"⚠️ Clip details failed, but clip was created: {basic_url} ({e})")
            return basic_url

        return clip.resolved_url

    def _upstream_failure(self, exc: Exception) -> ClipResult:
        error = classify_upstream_error(exc)
        logger.error(f"❌ Clip creation error: {exc}")

        if isinstance(error, UpstreamAuthError):
            kind = UpstreamErrorKind.AUTHENTICATION
        elif isinstance(error, UpstreamTransientError):
            kind = UpstreamErrorKind.STREAM_OFFLINE
        else:
            kind = UpstreamErrorKind.GENERIC
        return ClipResult.upstream_error(kind, status_code=error.status_code)


def create_clip(request: ClipRequest, config: RelayConfig, client: Optional[TwitchClient] = None,
                sleep: Callable[[float], None] = time.sleep) -> ClipResult:
    """Create a clip for ``request`` using the process configuration."""
    return ClipOrchestrator(config, client=client, sleep=sleep).create_clip(request)
