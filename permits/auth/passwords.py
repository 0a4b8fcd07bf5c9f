import bcrypt

# Coût bcrypt (2^12 itérations)
SALT_ROUNDS = 12


def hash_password(password: str, rounds: int = SALT_ROUNDS) -> str:
    # Génère un hash bcrypt avec salt auto
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Comparaison en temps constant (bcrypt.checkpw). False si le hash stocké est illisible."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
