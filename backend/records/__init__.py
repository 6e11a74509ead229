"""
Record types, input schemas and the error taxonomy shared by the stores.
"""
