"""Domain layer: field rules, form definitions, submission outcomes.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
