"""Versioned API routes."""
