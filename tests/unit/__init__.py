"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: URL inspection, PDF and Word extraction
    - documents/: fetching and format dispatch against a mock transport
    - agent/: configuration, context building and reply handling
    - ui/: history grouping and viewer state

Uses mocks for external services. Leverages pytest-check for multiple
assertions per test.
"""
