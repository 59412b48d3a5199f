"""
Data models shared between the indicator layer and the decision layer.
"""
