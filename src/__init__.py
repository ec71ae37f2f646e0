"""DocChat - document viewer and chat assistant.

Load a PDF, Word, Excel or Google Docs file by URL, read it in the browser,
and ask an LLM about it. Highlighted passages can be summarized or explained.

Combines FastAPI for the HTTP API, Agno for the LLM call, NiceGUI for the
web interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - agent: LLM passthrough with document context
    - documents: remote fetching and format dispatch
    - parsing: PDF, Word and text extraction
    - ui: Web interface for viewing and chatting
    - models: Request/response schemas
"""

__version__ = "0.1.0"
