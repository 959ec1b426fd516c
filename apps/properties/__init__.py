"""Properties app package.

Housing units and the ownership registry that guarantees only a property's
owner can change or remove it.
"""
