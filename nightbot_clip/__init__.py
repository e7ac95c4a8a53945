from .app import create_app
from .orchestrator import create_clip

__version__ = '1.0.0'

__all__ = ['create_app', 'create_clip', '__version__']
