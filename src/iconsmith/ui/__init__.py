"""User interfaces built on top of the iconsmith API."""
