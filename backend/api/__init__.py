"""
HTTP routers. Handlers only parse payloads and serialize results; all rules
live in the stores.
"""
