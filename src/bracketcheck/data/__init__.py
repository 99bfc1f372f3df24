"""Dataset utilities for labelled bracket sequences."""

from .manifest import ManifestEntry, read_manifest, write_manifest

__all__ = ["ManifestEntry", "read_manifest", "write_manifest"]
