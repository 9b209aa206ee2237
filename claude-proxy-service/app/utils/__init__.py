"""Utility functions and helpers.

This module contains utility classes and functions for:
- CORS header decoration of every outgoing response
- Relay error types and the JSON error response builder
- Inbound body parsing and size limiting
- Linking caller disconnection to outbound cancellation
"""
