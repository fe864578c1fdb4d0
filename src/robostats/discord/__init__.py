"""Discord integration for RoboStats.

The bot owns the upstream API clients and a process-wide skills cache.
Each /team invocation gets its own TeamSession and TeamView; everything
else is stateless.
"""
