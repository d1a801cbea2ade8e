# 📄 File: app/modules/review/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Star ratings and comments that students leave on courses they are taking.
#
# 🧪 Purpose (Technical Summary):
# Review bounded module: Review entity (1-5 rating), review eligibility rules based on
# the reviewer's enrollment, and the review use-case service.
#
# 🔗 Dependencies:
# - app.shared, user_management, enrollment modules
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (course review routes)
