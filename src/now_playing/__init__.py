"""Now Playing - localized movie discovery API."""

__version__ = "0.1.0"
