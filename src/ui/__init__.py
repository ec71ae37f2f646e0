"""NiceGUI interface - thin visualization layer for the document viewer and chat.

Responsibilities:
    - Document URL input and format hints
    - Document viewer (text, embedded PDF, spreadsheet iframe) with zoom,
      rotation and paging
    - Chat panel with quick actions and selected-text actions
    - Chat history persisted in per-browser user storage

Contains minimal business logic. Delegates all operations to the API.
"""
