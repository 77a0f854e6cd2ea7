"""
repositories/ - Data Access Layer
==================================
Persistence for the subscription list: a key-value store abstraction with
a PostgreSQL implementation, and the JSON codec that maps the list onto it.
"""
