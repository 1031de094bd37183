"""ABC Escolar backend: HTTP API and command line for the identity core."""
