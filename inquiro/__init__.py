"""Inquiro survey API."""
