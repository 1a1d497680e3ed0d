"""Edge load balancer application shells.

This package contains thin I/O layers for different interfaces:
- cli: Typer CLI
"""
