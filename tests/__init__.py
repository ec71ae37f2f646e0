"""Test package for DocChat.

Provides test coverage for all components with unit tests for isolated
logic and integration tests for the HTTP API.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint tests through the ASGI app

Sample PDF and Word files are generated in conftest. Remote document hosts
and the LLM are replaced by in-process fakes unless an API key is set.
Leverages pytest with pytest-check for soft assertions.
"""
