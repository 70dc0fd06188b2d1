"""
Internal DTOs

Values passed from service flows to the HTTP layer. These are not exposed
to clients directly; the renderer decides their representation.
"""
