"""Typer CLI sub-applications."""
