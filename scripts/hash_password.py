#!/usr/bin/env python3
"""Hash a staff password with the same Argon2 settings the app uses."""
import sys

from volunteerhub.core.security import get_password_hash
from volunteerhub.services.auth import MIN_PASSWORD_LENGTH

if len(sys.argv) != 2:
    print("Usage: python scripts/hash_password.py 'your-password-here'")
    sys.exit(1)

password = sys.argv[1]

if len(password) < MIN_PASSWORD_LENGTH:
    print(f"Error: Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    sys.exit(1)

print("Store this in staff_profiles.password_hash:")
print("-" * 80)
print(get_password_hash(password))
print("-" * 80)
