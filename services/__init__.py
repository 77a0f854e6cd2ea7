"""
services/ - Business Logic Layer
=================================
Spend aggregation, reminder computation, the subscription store and the
scheduled reminder job. Handlers call into this layer; it never talks to
Telegram directly.
"""
