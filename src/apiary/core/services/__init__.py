"""Services: cache, fetcher, resolver, renderer and the orchestrating pipeline."""
