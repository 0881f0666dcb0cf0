"""Shared utilities for the ISSP client."""
