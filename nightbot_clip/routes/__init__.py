from .clip import clip_bp
from .health import health_bp

__all__ = ['clip_bp', 'health_bp']
