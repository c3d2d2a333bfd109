"""
Application layer for indicators: DTOs and the whole-series engine facade.
"""
