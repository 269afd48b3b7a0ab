"""Dottie API service."""
