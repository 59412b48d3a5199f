"""
Market data models and normalization.
"""
