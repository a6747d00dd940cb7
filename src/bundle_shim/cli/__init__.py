"""Command-line interface for the bundle shim."""
