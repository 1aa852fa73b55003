"""JSON output stream, number formatting, string escaping and typed value codecs."""

__version__ = "0.1.0"
__all__ = ["containers", "escape", "native", "numbers", "stream"]