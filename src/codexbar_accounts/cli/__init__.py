from .main import app, main, version_callback


__all__ = [
    "app",
    "main",
    "version_callback",
]
