"""
Congestion prediction module.
"""
