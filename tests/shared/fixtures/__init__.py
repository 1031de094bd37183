"""Shared fixtures and helpers for integration tests."""
