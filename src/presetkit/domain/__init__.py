"""Domain layer — document model, key-file codec, versions, merge rules.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
