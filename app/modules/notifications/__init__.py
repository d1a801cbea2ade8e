# 📄 File: app/modules/notifications/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Emails the platform sends (welcome, enrollment confirmation, password changed).
# Messages are first written to a queue table and sent shortly afterwards, so a broken
# mail server never breaks signing up or enrolling.
#
# 🧪 Purpose (Technical Summary):
# Transactional email outbox: OutboxEmail entity and repository, EmailSender contract with
# an aiosmtplib implementation, and the EmailOutboxRelay draining pending rows.
#
# 🔗 Dependencies:
# - aiosmtplib, app.shared
#
# 🔄 Connected Modules / Calls From:
# - UserApplicationService, EnrollmentApplicationService (enqueue)
# - app.main lifespan (relay loop), celery_config (relay task)
