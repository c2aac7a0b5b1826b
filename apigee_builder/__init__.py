"""Apigee proxy builder: backend URL variabilization and backend-info KVMs."""

__version__ = "0.1.0"
