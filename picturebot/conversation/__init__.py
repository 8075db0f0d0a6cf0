"""Conversation state, persistence and per-conversation serialization."""
