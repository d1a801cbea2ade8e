# 📄 File: app/modules/enrollment/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The heart of the platform: signing students up for courses and tracking how far
# they got in every lesson until the course is finished.
#
# 🧪 Purpose (Technical Summary):
# Enrollment & progress bounded module: Enrollment/LessonProgress state machines, progress
# calculation and eligibility/pricing domain services, and the transactional use-case service.
#
# 🔗 Dependencies:
# - app.shared (core, domain, infrastructure)
# - user_management, course_management, payment, notifications modules
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (REST routes)
# - review module (eligibility checks)
