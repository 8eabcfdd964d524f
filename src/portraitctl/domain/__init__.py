"""Domain layer — directive grammar, commands, and evaluation rules.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
