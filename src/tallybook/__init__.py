"""Invoice and quote totals engine with a thin HTTP surface."""

__version__ = "1.0.0"
