"""Adapters for the outside world: HTTP transport, HTML documents and exporters."""
