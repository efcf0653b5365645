"""
Onboard Shared Kernel
=====================

Logic shared by every screen of the client.

Architecture:
- core: EventBus, configuration, scheduling, service registry
- infrastructure: Authentication service client
- domain: Validation rules and session persistence
"""

__all__ = []
