"""
DuckDB persistence for categories, species and animals.
"""
