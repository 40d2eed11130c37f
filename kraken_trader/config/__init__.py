"""
Configuration management module.

Default parameters, YAML/environment loading and validation for the
trading agent.
"""
