"""
URL shortener with a thread-safe in-memory datastore.

Packages:
- core: settings, exceptions, validators, code generation, logging setup
- db: datastore interface, in-memory implementation, snapshot format
- services: the user-facing service layer
"""

__version__ = "1.0.0"
