"""Sphere collision tests with a padded structure-of-arrays broadphase."""

__version__ = "0.3.4"
__all__ = ["linalg", "util", "sphere", "soa", "broadphase", "collection"]