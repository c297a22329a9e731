"""
nix-list — list the packages declared by a nix-darwin flake.
"""

__version__ = "0.1.0"
