"""String Analyzer Service - analyze, store and filter string properties."""

__version__ = "1.0.0"
