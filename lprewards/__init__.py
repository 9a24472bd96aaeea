"""Liquidity reward scoring and spread optimization for prediction markets."""

__version__ = "0.1.0"
