"""Pydantic schemas shared between the Elevate server and its clients."""
