"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler parses the command arguments, calls the
SubscriptionTracker shared through ``bot_data`` and renders the result.
No business logic lives here.
"""
