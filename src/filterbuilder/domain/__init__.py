"""Domain layer — operation enums, error codes, and schema entries.

Pure values with no I/O. Apart from the shared exception types it never
imports from services, strategies, translation, or config.
"""
