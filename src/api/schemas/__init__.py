"""Pydantic models describing the API's response envelopes."""
