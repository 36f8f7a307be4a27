"""Routing — path patterns, route declarations, the registry, and dispatch.

Routes are registered during setup and frozen before the first request.
Matching walks them in registration order; the first structural match wins.
"""
