"""
Motorbike catalog feature.
"""
