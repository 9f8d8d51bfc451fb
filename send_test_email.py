#!/usr/bin/env python3
"""
Send a test email through the backend configured in the environment.

Reads MAIL_BACKEND and the SMTP_* settings (see mail_dispatch/config.py)
from .env.local or .env.

Usage:
    python send_test_email.py
"""

import sys

from mail_dispatch import Mailer, config

print("🧪 Testing Email Send")
print("=" * 60)
print(f"Backend: {config.MAIL_BACKEND}")
print(f"Host: {config.SMTP_HOST or '(not set)'}")
print()

from_email = input("Sender address: ").strip()
test_email = input("Enter your email address to test: ").strip()

if not from_email or not test_email:
    print("No email address provided. Skipping test.")
    sys.exit(0)

mailer = Mailer.from_env()
mailer.set_from(from_email, 'Mail Dispatch')
mailer.add_to(test_email)
mailer.set_text('Hello! This is a test email sent via mail-dispatch.')
mailer.set_html('<p>Hello! This is a test email sent via <b>mail-dispatch</b>.</p>')
mailer.set_alt_body(True)

print(f"\nSending test email to {test_email}...")
response = mailer.send_with_response()

print()
if response.success:
    print("✅ Email sent successfully!")
    if response.message_id:
        print(f"   Message ID: {response.message_id}")
else:
    print(f"❌ Email failed ({response.error_kind}): {response.error}")
    sys.exit(1)
