"""Infrastructure adapters.

Keep this package import-light: import concrete adapters from their
subpackages when needed.
"""

__all__ = []
