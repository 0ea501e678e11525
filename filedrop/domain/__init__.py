"""
Domain Layer

Transfer records, storage contracts, domain events and errors.
"""
