"""Event reminder notifications backend."""
