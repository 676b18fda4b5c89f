"""Puzzle domain services: scoring, session state and persistence.

Routes and socket handlers import from here; nothing in this package knows
about HTTP or Socket.IO.
"""
