"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and wire aliases
    - agent/: Configuration, history conversion and event mapping
    - search/: Serper client over a mock transport
    - auth/: Signed session tokens
    - ui/: Message rendering and stream event folding

Uses mocks for external services when needed. Leverages pytest-check for
multiple assertions per test.
"""
