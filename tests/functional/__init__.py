"""Functional tests for the decision task components."""
