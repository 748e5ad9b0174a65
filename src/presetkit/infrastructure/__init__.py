"""Infrastructure layer — preset paths, file I/O and the store registry.

This layer depends on the stdlib and the domain layer. It must never
import from services, commands, or output.
"""
