"""
Core domain logic: chunking, identifier resolution, prompt construction,
completion normalization, candidate fallback and the exception hierarchy.
"""
