"""Adapters for TensorFlow collaborators and meta graph metadata."""
