"""Domain models and entities.

Why:
- Plain, strict data structures (Pydantic v2 and dataclasses) live here.
- The domain knows nothing about HTTP, BeautifulSoup or the CLI.
"""
