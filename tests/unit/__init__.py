"""Unit tests for individual components in isolation.

Coverage:
    - client/: Stream reading, message assembly, sending and history
    - models/ and ui/: Validation and presentation helpers

HTTP traffic is served by httpx.MockTransport with scripted responses.
Leverages pytest-check for multiple assertions per test.
"""
