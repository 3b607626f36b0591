"""
Test Suite

Contains unit tests for the backend system.

Structure:
- tests/unit/: Tests for individual components (schemas, adapters, aggregation logic, API)

Uses pytest with pytest-asyncio for testing async functionality.
External APIs are never called; HTTP clients are mocked.
"""
