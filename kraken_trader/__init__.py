"""
Kraken Trader - Adaptive Threshold Trading Agent

A single-asset trading agent for the Kraken spot exchange. Periodically
observes the market price and a short OHLC history, classifies the trend,
adapts its buy/sell thresholds and submits signed orders when a trade
decision is made.
"""

__version__ = "0.1.0"
__author__ = "Kraken Trader Team"
