"""Domain layer — record values, strategies, and helper rules.

This layer depends only on stdlib and pydantic.
It must never import from engine, services, infrastructure, commands, or config.
"""
