"""
Feature modules for the Tourline client core.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- exceptions.py: Module-specific exceptions
- an implementation (service.py, client.py, ...)

Modules communicate through interfaces, not concrete implementations.
"""
