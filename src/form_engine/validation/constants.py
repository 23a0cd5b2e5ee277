"""
Constants for the built-in validation rules.

Patterns are compiled once here so every rule instance shares them.
"""

import re

# Permissive RFC-5322-like address: ASCII local part, domain labels and a 2-64 letter TLD
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")
