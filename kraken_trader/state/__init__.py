"""
Position state machine module.

Tracks whether a position is open and at what price it was entered, and
decides Buy / Sell / Hold each cycle (Flat -> Holding -> Flat).
"""
