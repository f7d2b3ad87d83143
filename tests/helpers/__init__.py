"""Shared helpers for the symfttpd test suite."""
