"""Interfaces/abstractions of the core.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- The core depends on abstractions, not on BeautifulSoup.
"""
