"""Core timer, rendering and export logic."""
