"""Apiary: fill HTML placeholders with data crawled from the W3C API."""

__version__ = "0.5.0"
