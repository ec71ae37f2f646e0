"""Integration tests for the API working as a system.

Coverage:
    - Document processing and proxy endpoints with real parsing
    - Chat endpoints, complete and streaming
    - Live LLM replies (when configured)

Requests go through the real FastAPI app via ASGITransport. Outbound
document fetches hit an httpx MockTransport; chat uses a fake agent service
except in tests marked ``requires_api_key``.
"""
