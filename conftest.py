"""Puts the repository root on sys.path so tests run without installation."""
