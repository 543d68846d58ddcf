"""
Root package for the Baldur's Gate 3 character sheet Django project.

Holds the settings, the root URL configuration and the WSGI entry point;
the API itself lives in the `api` app.
"""
