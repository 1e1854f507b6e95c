"""Karate feature execution service."""
