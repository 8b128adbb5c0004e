"""
Settings modules for public-schema.
"""
