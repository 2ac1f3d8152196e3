"""
Application services for the prediction module.
"""
