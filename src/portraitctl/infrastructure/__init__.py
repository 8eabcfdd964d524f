"""Infrastructure layer — in-memory layer trees and manifest files.

This layer depends on stdlib, the domain models, and third-party parsers.
It must never import from services, commands, or output.
"""
