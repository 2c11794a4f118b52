"""
Generators — produce plugin files from the descriptor and module models.

Each generator module exposes a ``generate_*()`` function that returns
``GeneratedFile`` instances with paths relative to the package directory.
Every generator takes an optional ``renderer`` so tests can substitute
the template engine.
"""
