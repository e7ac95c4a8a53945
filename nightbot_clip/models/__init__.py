from .clips import (
    ClipRequest,
    ClipResult,
    ResultKind,
    UpstreamClip,
    UpstreamErrorKind,
    fallback_clip_url,
)

__all__ = [
    'ClipRequest',
    'ClipResult',
    'ResultKind',
    'UpstreamClip',
    'UpstreamErrorKind',
    'fallback_clip_url',
]
