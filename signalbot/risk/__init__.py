"""
Position sizing and stop-loss / take-profit levels.
"""
from .sizer import RiskSizer

__all__ = ['RiskSizer']
