"""
Command-line interface for bqplane.
"""
