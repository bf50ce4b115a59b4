# src/chat_geo/schemas/__init__.py
"""Pydantic schemas for request and response payloads."""
