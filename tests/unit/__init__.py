"""
Unit tests for waiter-errors.

Test individual components in isolation:
- Retry policy and executor (backoff schedule, attempt budget)
- Failure classification and logging
- Content negotiation, error context, renderers, response assembly
- Request helpers and JSON responses
"""
