"""
API package.

``router.py`` exposes a single ``router`` which includes every
endpoint module from ``endpoints``.
"""
