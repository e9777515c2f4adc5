"""
Shared service utilities.

- http.py  - ``requests`` session factory used for every upstream fetch
"""
