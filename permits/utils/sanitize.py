# module permits.utils.sanitize
from typing import Any, Dict

import bleach
from markupsafe import Markup


def sanitize_text(value: Any) -> Markup:
    """
    Nettoie une valeur destinée à être affichée dans une page HTML.
    - Supprime toutes les balises (contenu texte conservé), échappe le reste.
    - Les guillemets sont échappés aussi: la valeur peut servir dans un attribut HTML.
    - Le résultat est marqué sûr pour Jinja2 (pas de double échappement).
    """
    text = "" if value is None else str(value)
    cleaned = bleach.clean(text, tags=[], attributes={}, strip=True)
    return Markup(cleaned.replace('"', "&#34;").replace("'", "&#39;"))


def sanitize_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Applique sanitize_text à chaque champ d'un modèle de vue.
    - Les booléens et entiers calculés côté serveur sont conservés tels quels.
    """
    cleaned: Dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, (bool, int)):
            cleaned[key] = value
        else:
            cleaned[key] = sanitize_text(value)
    return cleaned
