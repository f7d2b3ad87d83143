"""
symfttpd - a supervised lighttpd launcher for PHP projects

symfttpd generates a lighttpd configuration and rewrite rules from the
project's web directory, runs lighttpd in the foreground and restarts it
whenever the web directory layout changes.
"""

__version__ = "2.1.0"
__all__ = ["__version__"]
