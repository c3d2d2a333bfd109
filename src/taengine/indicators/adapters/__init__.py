"""
Adapters package for indicators.
"""
