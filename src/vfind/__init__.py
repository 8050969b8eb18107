"""
vfind - Core Package

A find-style file search engine that evaluates predicate expressions over an
abstract, possibly virtualized, file system.
"""

__version__ = "0.1.0"
__author__ = "vfind Team"
