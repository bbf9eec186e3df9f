"""MindNest services.

- Analysis Service: shared keyword analysis engine and HTTP shell
- Crisis Engine: crisis phrase escalation and notification forwarding
- Moderation Service: blocked-term screening of community posts
- Companion Service: chat companion replies

No service keeps raw user text or raw user ids in logs.
"""
