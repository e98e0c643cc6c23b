"""Service layer — business logic returning ServiceResult.

Services may import from domain, infrastructure, workflow, and actions.
They must never import from commands or output.
"""
