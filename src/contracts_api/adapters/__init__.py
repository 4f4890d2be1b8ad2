"""
Adapter layer for the Contracts API.

Contains the blob store abstraction with S3 and local filesystem
implementations, selected by deployment mode.
"""
