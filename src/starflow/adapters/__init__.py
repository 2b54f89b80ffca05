"""
Web Adapters

Integrations that put a mounted StarFlow program on the web:

- fasthtml: page route for a root, DOM event delivery, route channels
"""
