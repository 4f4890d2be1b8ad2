"""HTTP routes of the Contracts API."""
