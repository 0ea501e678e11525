"""
Infrastructure Layer

Concrete record store and blob store implementations plus event handlers.
"""
