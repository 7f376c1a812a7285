"""Operation framework.

Provides operation declarations, the registry, response presentation
and the dispatcher that ties them to the HTTP transport.
"""
