"""Core application utilities.

This package contains non-UI foundations shared across the app:
- application handle (write-once)
- LogCat logging facade and the logging sink behind it
- app context (page + config + logcat + application handle)
- safe wrappers for callbacks
"""
