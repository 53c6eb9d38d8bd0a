"""
Monitoring Stack Test Suite.

- unit/: Drivers, routing, tenants, cache and service tests
- integration/: CLI entry points and HTTP API tests
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
