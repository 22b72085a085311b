"""WSGI entrypoint for deploying the forfettario backend behind Passenger."""

from forfettario.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
