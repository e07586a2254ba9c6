"""ixschema — schema-driven instruction encoder/decoder for program IDLs."""

__version__ = "0.1.0"
