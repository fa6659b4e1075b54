"""
Car catalog feature: records, validation rules, SQL and routes.
"""
