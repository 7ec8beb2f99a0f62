"""Adapters binding the domain ports to Mochi and the local file system."""
