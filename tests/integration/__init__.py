"""
Integration tests for waiter-errors.

Exercise the FastAPI application end to end with TestClient: exceptions
raised by routes must come back as negotiated error responses.
"""
