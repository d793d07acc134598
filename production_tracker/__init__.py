"""
Production Tracker - Field production earned value and cost forecasting.
"""

__version__ = "1.0.0"
