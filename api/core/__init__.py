"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that both catalog features use
(DB wiring, settings, logging, validation, pagination, error mapping).
Keep feature-specific SQL and business rules in the feature package
(e.g. `cars/`).
"""
