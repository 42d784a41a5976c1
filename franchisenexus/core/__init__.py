"""Core abstractions shared across layers."""
