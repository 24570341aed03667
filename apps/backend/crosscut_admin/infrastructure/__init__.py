"""
Infrastructure layer: audit feeds, product catalogs and service clients.
"""
