"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming updates
    - Session list with create, select and delete
    - Stream error banner and reply indicator

Contains no conversation logic. Delegates all operations to ChatSessionClient.
"""
