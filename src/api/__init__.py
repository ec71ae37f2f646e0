"""FastAPI endpoints for DocChat.

Endpoints:
    - GET /health: Service health status
    - POST /api/documents/process: Fetch a document and extract its text
    - POST|GET /api/documents/proxy: Relay raw document bytes
    - POST /api/chat: Chat completion about the loaded document
    - POST /api/chat/stream: Same, streamed as Server-Sent Events
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
