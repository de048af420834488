"""
Integration tests for the Completion Layer.

Test components together over the real httpx request path:
- OpenAI-compatible transport (payloads, auth, error mapping) via httpx.MockTransport
- Full client flow (fallback → transport → extraction → JSON repair)
- Live provider round trip (marked with @pytest.mark.integration, skipped without credentials)
"""
