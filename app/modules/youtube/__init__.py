# 📄 File: app/modules/youtube/__init__.py
# 🧭 Purpose (Layman Explanation):
# Looks up YouTube videos and playlists that instructors paste into lessons, so the platform
# can show titles, thumbnails and running times.
# 🧪 Purpose (Technical Summary):
# YouTube metadata module: URL and ISO-8601 duration parsing, Data API v3 client over the
# shared aiohttp/tenacity APIClient, and a cache-first lookup service.
# 🔗 Dependencies:
# aiohttp, tenacity (via APIClient), redis (via CacheService), pydantic
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, ApplicationContainer
