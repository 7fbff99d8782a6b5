"""
Tourline client core.

Resilient network/session coordination for the Tourline mobile client:
an HTTP client with retry and session invalidation, a connectivity monitor
with a deferred-operation queue, and the authentication session lifecycle.
"""

__version__ = "0.1.0"
