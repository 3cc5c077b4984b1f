"""Regression tests for snapshot testing.

Uses syrupy for snapshot assertions to detect unexpected changes
in the variables bound for each decision result shape:
- Single decision, single and multiple rule hits
- Decision service, single and multiple decisions
"""
