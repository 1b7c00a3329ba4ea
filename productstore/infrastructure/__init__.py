"""Infrastructure layer.

Configuration, database access, logging, token verification and the
external text-generation client.
"""
