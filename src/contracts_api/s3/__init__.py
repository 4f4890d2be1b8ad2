"""Thin boto3 helpers for the contract archive bucket."""
