"""
Unit Tests

Unit tests run in isolation without external dependencies.
The remote stats source is mocked (AsyncMock or httpx.MockTransport).
"""
