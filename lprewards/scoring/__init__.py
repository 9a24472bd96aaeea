"""Reward scoring, volatility, fill-risk and spread search."""
