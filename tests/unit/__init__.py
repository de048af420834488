"""
Unit tests for the Completion Layer.

Test individual components in isolation:
- Message sanitization and content extraction
- JSON repair and schema validation
- Retry engine (shared budget, fallback, permanent errors)
- Completion client with a mocked transport
"""
