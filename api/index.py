import sys
import os

# Add the project root to the path so the package imports without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from nightbot_clip.app import create_app

# Export for Vercel
app = create_app()
