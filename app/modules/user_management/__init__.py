# 📄 File: app/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes everything about user accounts: registering, logging in and out,
# keeping track of signed-in devices, and managing profiles.
# 🧪 Purpose (Technical Summary):
# User management bounded module (domain, application, infrastructure, presentation layers)
# covering users, sessions, JWT authentication and account administration.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, app.shared.core, pydantic, passlib, python-jose
# 🔄 Connected Modules / Calls From:
# app.main, authentication middleware, enrollment/course/review modules (user lookups)
