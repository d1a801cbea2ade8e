# 📄 File: app/modules/payment/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Charging students for paid courses through the Midtrans payment gateway and
# recording what the gateway tells us about each payment afterwards.
#
# 🧪 Purpose (Technical Summary):
# Payment bounded module: Payment aggregate, PaymentService contract with the Midtrans
# Snap implementation, and webhook notification processing with signature verification.
#
# 🔗 Dependencies:
# - app.shared (core, domain, infrastructure.external_apis)
#
# 🔄 Connected Modules / Calls From:
# - enrollment module (payment creation inside the enrollment unit of work)
# - app.api.v1.router (webhook and payment lookup routes)
