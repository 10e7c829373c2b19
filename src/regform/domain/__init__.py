"""Domain layer — fields, rules, and the error store.

This layer depends only on stdlib.
It must never import from form, services, commands, plugins, or config.
"""
