"""Test support modules for crudkit tests (shared models)."""
