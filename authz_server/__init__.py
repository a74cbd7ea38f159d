# (c) Copyright Datacraft, 2026
"""Relationship-based authorization server."""
