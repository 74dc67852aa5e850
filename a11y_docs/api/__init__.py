"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (search service wired)
- POST /v1/articles/search: Ranked article search
- POST /v1/articles/fetch: Single article with metadata
- GET /v1/articles: Full article listing
"""
