"""Headless dictionary browser: word store, query pipeline and HTTP/CLI surfaces."""

__version__ = "0.1.0"
