# 📄 File: app/modules/course_management/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The course catalog: instructors create courses and lessons, group them in categories
# and publish them so students can enroll.
#
# 🧪 Purpose (Technical Summary):
# Course management bounded module (domain, application, infrastructure, presentation layers).
#
# 🔗 Dependencies:
# - app.shared (config, core, domain, infrastructure)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (REST routes)
# - enrollment, review modules (course lookups)
