"""idhunt: brute-force file identifier enumeration client."""

__version__ = "0.1.0"
