"""Precise Calculator plugin manifest."""

manifest = {
    "title": "Precise Calculator",
    "summary": "Exact rational and 100-digit decimal arithmetic with a fixed-accuracy sine.",
    "category": "General Utilities",
    "blueprint": "precise_calculator",
}

__all__ = ["manifest"]
