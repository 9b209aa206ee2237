"""API route handlers.

This module contains FastAPI routers for:
- Health check endpoints
- The Messages API relay endpoint
- CORS preflight for any path

Every router uses ``CORSRoute`` so responses leave with CORS headers.
"""
