# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'app' folder contains the learning platform backend
# and records its version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version metadata for the LMS FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Package imports throughout the application

"""
LearnHub LMS - Learning Management System Backend

A REST backend for course catalogs, enrollments, per-lesson progress
tracking, payments, reviews and YouTube lesson metadata.
"""

__version__ = "1.0.0"
__title__ = "LearnHub LMS API"
__description__ = "Learning management backend: courses, enrollments and progress tracking"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
