"""
Tests package for FileDrop.

This package contains test suites organized by type:
- unit/: Fast tests with in-memory stores
- integration/: Tests against a real Redis server
- property/: Property-based tests using Hypothesis
"""
