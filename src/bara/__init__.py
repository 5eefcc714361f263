"""bara: folder destination writer and typed format primitive."""

__version__ = "0.1.0"
