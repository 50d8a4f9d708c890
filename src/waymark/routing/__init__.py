"""Routing — ordered per-method route table with first-match dispatch.

Routes are registered during setup and compiled once, at registration.
The table is frozen before the router starts serving.
"""
