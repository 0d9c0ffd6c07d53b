"""
Command-line entry points.

Provides:
- recommend: trade proposal for the latest bar of an OHLCV CSV file
"""
