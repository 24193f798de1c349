"""
Role-based access control for the HRM portal.

The authorization core lives in ``hrm_access.security``; the FastAPI
application in ``hrm_access.main`` wires it to HTTP.
"""

__version__ = "0.1.0"
