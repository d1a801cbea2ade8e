# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the learning platform's API, kept separate so later versions can change
# without breaking existing apps.
# 🧪 Purpose (Technical Summary):
# Route prefixes and OpenAPI tags shared by the v1 router aggregation.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

"""
LMS API Version 1

    /api/v1/auth          registration, login, token refresh, sessions
    /api/v1/users         current user profile, admin activation
    /api/v1/courses       catalog, lessons, course reviews
    /api/v1/categories    course categories
    /api/v1/enrollments   enrollment and lesson progress
    /api/v1/payments      gateway notifications, enrollment payments
    /api/v1/reviews       review edits
    /api/v1/youtube       YouTube metadata lookup
"""

__api_version__ = "v1"

ROUTE_PREFIXES = {
    "auth": "/auth",
    "users": "/users",
    "courses": "/courses",
    "categories": "/categories",
    "enrollments": "/enrollments",
    "payments": "/payments",
    "reviews": "/reviews",
    "youtube": "/youtube",
}

API_TAGS = {
    "auth": "Authentication",
    "users": "Users",
    "courses": "Courses",
    "categories": "Categories",
    "enrollments": "Enrollments",
    "payments": "Payments",
    "reviews": "Reviews",
    "youtube": "YouTube",
}
