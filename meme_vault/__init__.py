"""Personal vault for memes and links with Open Graph previews."""

__version__ = "0.1.0"
