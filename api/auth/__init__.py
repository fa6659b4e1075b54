"""
Users, tokens and permission checks.
"""
