"""
Utility functions module.

Calendar-date helpers shared by the generator, the ingestor and report export.

Date Semantics:
- Series dates are plain calendar dates, formatted as ISO ``YYYY-MM-DD``
- "Today" is the local calendar date unless a caller pins it explicitly
- Report timestamps are timezone-aware UTC instants
"""
