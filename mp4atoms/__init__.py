"""Encode and decode MP4/ISOBMFF atoms: file type, media data, fragments, event messages and item metadata."""

__version__ = "0.8.1"