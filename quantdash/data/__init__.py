"""
Series data module.

Generates synthetic price series, ingests uploaded CSV files into generic rows,
and adapts those rows into typed price points for the analytics core.
"""
