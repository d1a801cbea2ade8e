# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The signpost for version 1 of the API: it sends account requests to the account handlers,
# course requests to the catalog handlers, and so on.
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under its /api/v1 prefix and exposes a small info endpoint.
# 🔗 Dependencies:
# FastAPI, module presentation routers
# 🔄 Connected Modules / Calls From:
# app.main (included with prefix /api/v1)

import logging

from fastapi import APIRouter

from app.modules.course_management.presentation.api.v1.courses import categories_router, courses_router
from app.modules.enrollment.presentation.api.v1.enrollments import enrollments_router
from app.modules.payment.presentation.api.v1.payments import payments_router
from app.modules.review.presentation.api.v1.reviews import course_reviews_router, reviews_router
from app.modules.user_management.presentation.api.v1.auth import auth_router
from app.modules.user_management.presentation.api.v1.users import users_router
from app.modules.youtube.presentation.api.v1.youtube import youtube_router
from app.shared.config.settings import get_settings

from . import API_TAGS, ROUTE_PREFIXES

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

for router, key in [
    (auth_router, "auth"),
    (users_router, "users"),
    (courses_router, "courses"),
    (course_reviews_router, "courses"),
    (categories_router, "categories"),
    (enrollments_router, "enrollments"),
    (payments_router, "payments"),
    (reviews_router, "reviews"),
    (youtube_router, "youtube"),
]:
    api_v1_router.include_router(router, prefix=ROUTE_PREFIXES[key], tags=[API_TAGS[key]])


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    settings = get_settings()
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api_version": "v1",
        "modules": sorted(set(ROUTE_PREFIXES.values())),
    }
