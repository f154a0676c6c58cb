"""Logging infrastructure package."""
