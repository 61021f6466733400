"""Felice search client."""
