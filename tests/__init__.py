"""Test package for the streaming chat client.

Structure:
    - unit/: Client components against scripted HTTP transports
    - integration/: Full client against an in-process FastAPI backend

Leverages pytest with pytest-check for soft assertions.
"""
