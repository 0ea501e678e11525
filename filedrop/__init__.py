"""
FileDrop

Ephemeral file transfer service: an upload is stored under a random key and
can be downloaded a limited number of times before it expires.
"""

__version__ = "1.0.0"
