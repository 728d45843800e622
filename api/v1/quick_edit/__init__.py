"""Quick Edit API routes - the list screen hooks served over HTTP"""

from fastapi import APIRouter
from . import fields, posts, scripts

router = APIRouter()

router.include_router(scripts.router, prefix="/footer-scripts", tags=["Quick Edit Scripts"])
router.include_router(posts.router, prefix="/posts", tags=["Quick Edit Save"])
router.include_router(fields.router, tags=["Quick Edit Fields"])
