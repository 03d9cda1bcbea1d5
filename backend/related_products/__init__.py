"""Rule-based checks for related-product listings."""

__version__ = "1.0.0"
