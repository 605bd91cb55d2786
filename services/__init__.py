"""Business logic service layer.

This package groups higher-level operations that coordinate models, the token
service and outside collaborators (mail, Google). Keeping business logic out
of route handlers makes your codebase easier to test and maintain.
"""
