"""
Domain Layer

This package contains the catalog's domain vocabulary, separated from
persistence concerns and infrastructure.

Structure:
- value_objects/: Immutable value types without identity
"""
