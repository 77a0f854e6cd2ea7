"""
security/ - Request Guards
===========================
Decorators applied to bot handlers before they reach the services.
"""
