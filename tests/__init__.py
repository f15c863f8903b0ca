"""
Tests for the property import engine.

Run all tests: pytest
Run one module: pytest tests/unit/test_header_matcher.py -v
"""
