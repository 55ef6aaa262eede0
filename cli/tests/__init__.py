"""
Tests for the delegation command line tools.
"""
