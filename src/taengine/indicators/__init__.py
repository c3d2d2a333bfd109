"""
Windowed technical-analysis indicators.

Docs: docs/architecture/indicators/windowed-engine-core.md
"""
