"""
Tests for the delegation types.
"""
