"""
Query builder implementations.

Each backend lives in its own subpackage so that importing one never pulls in
another's client library.
"""
