"""Serialization helpers, generators and the file writer."""
