"""
fsqlctl.

Command line client for the Federated Search Query Language (FSQL) API.
Dispatches commands typed in an interactive shell, piped on stdin, read
from a file or passed on the command line, and renders the typed response.
"""

__version__ = "0.13.0"
