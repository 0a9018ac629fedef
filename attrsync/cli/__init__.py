# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
attrsync CLI

Usage:
    attrsync apply            # Roll the template out to every repository
    attrsync apply --dry-run  # Preview the plan without touching anything
    attrsync list             # Show the repositories a run would process
    attrsync config           # Show or set saved defaults
"""

from .main import cli, main

__all__ = ['cli', 'main']
