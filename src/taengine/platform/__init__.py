"""
Platform-wide runtime configuration.
"""
