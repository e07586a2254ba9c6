"""Wire codec: fixed-width little-endian primitives and instruction discriminators."""
