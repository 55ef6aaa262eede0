"""
Tests for the delegation base types.
"""
