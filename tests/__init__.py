"""Test package for Deepsearch.

Structure:
    - unit/: Individual function and class tests
    - integration/: FastAPI app tests through the ASGI transport

External services (model provider, Serper) are replaced with fakes or
httpx mock transports. Leverages pytest with pytest-check for soft assertions.
"""
