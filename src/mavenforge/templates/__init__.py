"""Starlark rule definitions copied verbatim into generated repositories."""
