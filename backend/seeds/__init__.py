"""
YAML seed datasets (see `data/seeds/*.yaml`).
"""
