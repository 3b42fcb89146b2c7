"""Service layer — record operations returning ServiceResult.

Services may import from config, domain, engine, and infrastructure.
They must never import from commands or output.
"""
