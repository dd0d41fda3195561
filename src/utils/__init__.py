"""
Shared Utilities

Constants and I/O helpers used across all modules. Import submodules
directly (``src.utils.io``, ``src.utils.constants``).
"""
