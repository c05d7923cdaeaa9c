"""Ports, shared state and error types."""
