"""
Boundary layer for external system integrations.

Handles all interactions with external systems (embedding providers).
Provides adapters and clients for infrastructure dependencies.
"""
