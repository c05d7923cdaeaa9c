"""Durable key-value storage backends."""
