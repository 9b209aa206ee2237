"""Business logic services.

This module contains service classes for:
- Relaying Messages API calls to Anthropic
"""
