"""
Library modules that are shared across the `vpkdir` package.
"""
