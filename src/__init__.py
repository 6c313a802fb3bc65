"""Streaming chat client - one live AI conversation over Server-Sent Events.

Combines HTTPX for HTTP and push streaming, Pydantic for data validation,
and NiceGUI for visualization.

Components:
    - client: Session connection, message assembly, sending and history
    - models: Wire and message log schemas
    - ui: Web interface for chat interactions
"""

__version__ = "0.1.0"
