"""API package: application factory, routes, dependencies and error handlers."""
