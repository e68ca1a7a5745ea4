"""
CLI Client Module.

Interactive shell and one-shot modes built with Typer, Rich and
prompt_toolkit on top of fsqlctl.api.

Architecture:
- CLI is a thin presentation layer
- Routing, dispatch and decoding live in fsqlctl.api
- Output for pipelines goes to stdout, everything else to stderr

Usage:
    fsqlctl --help
    fsqlctl <TOKEN>                       # Interactive mode
    fsqlctl <TOKEN> -c "EXPLAIN VERSION"  # One-shot
"""
