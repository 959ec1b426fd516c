"""
Shared Kernel

Base classes and utilities shared across all domain apps: the error
taxonomy, domain events, the in-process message bus and versioned writes.
"""
