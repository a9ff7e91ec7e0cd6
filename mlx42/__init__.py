"""Image-based window and rendering library with headless and pygame backends."""

__version__ = "0.1.0"

__all__ = ["backend", "core", "errors", "images", "textures", "utils", "xpm42"]