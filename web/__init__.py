"""
HTTP interface for the invoice PDF service.
"""
