"""Card list parsing, download planning and small application helpers for printing card proxies."""

__version__ = "0.1.0"