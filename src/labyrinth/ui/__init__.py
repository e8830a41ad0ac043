"""Presentation adapters. Importing this package never requires arcade."""
