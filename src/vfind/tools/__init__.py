"""
Search tools and utilities for vfind.

This package contains the pieces of the find engine: glob matching, argument
parsing, predicate evaluation, filesystem walking and action execution.
"""
