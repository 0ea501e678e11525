"""
API Layer

Versioned HTTP endpoints.
"""
