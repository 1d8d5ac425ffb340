"""
Test support utilities for spine-fixtures tests.

Record types and store doubles shared across test modules. They live here
rather than in conftest.py so test modules can import them directly.
"""
