"""Building blocks of a lightweight XML/XSLT processor: trees, parsing, output and helpers."""

__version__ = "0.1.0"