"""Apiary core.

Why a separate package:
- Domain types, crawl algorithm and rendering live here, free of CLI concerns.
- Adapters (HTML, HTTP) depend on the core, never the other way around.
"""
