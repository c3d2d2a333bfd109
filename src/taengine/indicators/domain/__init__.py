"""
Indicators domain: entities, errors and hard definitions.
"""
