"""Test package. Settings require a signing secret before the app is imported."""

import os

os.environ.setdefault("JWT_SECRET", "test-signing-secret-not-for-production-0123456789")
