"""Ordered string-keyed hash tables, lookup3 hashing and a flag-driven JSON encoder."""

__version__ = "2.10.0"
__all__ = ["dump", "errors", "hashtable", "lookup3", "seed"]