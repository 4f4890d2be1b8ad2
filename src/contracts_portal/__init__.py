"""
Contract Portal client.

HTTP access to the Contracts API plus the state behind the portal's views:
upload widget, filtered/sorted file list, delete confirmation and
notifications.
"""
