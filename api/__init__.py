"""
The API package for the character sheet application.

This package contains all Django REST Framework components, including
models, validators, serializers, views and the storage client.
"""
