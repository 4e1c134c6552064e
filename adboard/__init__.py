"""Classified-advertisement board service."""
