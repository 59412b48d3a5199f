"""
Trade lifecycle state: records, daily statistics and transitions.
"""
