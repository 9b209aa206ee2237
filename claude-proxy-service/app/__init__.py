"""Claude Proxy Service Application Package.

This package contains the core application components:
- models: Response models and upstream result types
- routers: API route handlers
- services: The outbound Anthropic client
- utils: CORS, errors, body parsing, disconnect handling
"""

__version__ = "0.1.0"
