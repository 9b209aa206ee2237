"""CORS preflight: OPTIONS on any path answers 200 with an empty body."""

from fastapi import APIRouter, Response

from app.utils.cors import CORSRoute

router = APIRouter(route_class=CORSRoute, tags=["CORS"])


@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    return Response(status_code=200)
