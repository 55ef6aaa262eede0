"""
Command line tools.
"""
