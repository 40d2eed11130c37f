"""
Market data module.

Canonical price bar / snapshot models and parsers for Kraken public
endpoint payloads.
"""
