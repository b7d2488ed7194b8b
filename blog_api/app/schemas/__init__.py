"""
Pydantic schema definitions for API payloads.

Input schemas (``UserCreate``, ``PostCreate``, ``PostUpdate``) are the
normalized values produced by ``app.validators``; the ``*Read`` schemas
describe what the API returns.  Schemas are separated from the SQL in
the repositories to decouple API representation from persistence.
"""
