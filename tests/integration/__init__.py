"""Integration tests for components working together as a system.

No mocks inside the client. Requests and push streams travel through
httpx.ASGITransport to a FastAPI app that mimics the chat backend.
"""
