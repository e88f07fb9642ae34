"""Test mocks for crud-e2e.

Provides mock implementations for testing:
- MockCrudService: Simulates the rooms CRUD API in-process
"""

from .crud_service import MockCrudService, MockCrudState

__all__ = ["MockCrudService", "MockCrudState"]
