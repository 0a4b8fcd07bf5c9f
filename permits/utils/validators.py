import re

# Forme minimale d'une adresse: local@domaine.tld, sans espace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(v: str) -> bool:
    return bool(v) and EMAIL_PATTERN.match(v) is not None


def validate_password_strength(v: str) -> str:
    if len(v or "") < 8:
        raise ValueError("Password must be at least 8 characters long")
    if not re.search(r'[A-Z]', v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not re.search(r'[a-z]', v):
        raise ValueError('Password must contain at least one lowercase letter')
    if not re.search(r'\d', v):
        raise ValueError('Password must contain at least one digit')
    if not re.search(r'[!@#$%^&*()_+\-=\[\]{};:\'\"\\|,.<>\/?]', v):
        raise ValueError('Password must contain at least one special character')
    return v
