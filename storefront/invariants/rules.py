"""
Storefront Core - Invariants
Ces règles sont IMMUABLES et ne peuvent être modifiées par configuration.
Total: 33 règles
"""

from enum import Enum
from typing import Final


class Severity(Enum):
    """Criticité d'un invariant."""

    BLOCKING = "blocking"
    WARNING = "warning"


class Invariant:
    """Définition d'un invariant."""

    def __init__(self, id: str, rule: str, severity: Severity = Severity.BLOCKING):
        self.id = id
        self.rule = rule
        self.severity = severity

    def __repr__(self) -> str:
        return f"Invariant({self.id})"


# ══════════════════════════════════════════════════════════════════════════════
# AUTHENTIFICATION (AUTH_001-006) - 6 règles
# ══════════════════════════════════════════════════════════════════════════════

AUTH_001 = Invariant("AUTH_001", "Mot de passe JAMAIS stocké en clair")
AUTH_002 = Invariant("AUTH_002", "Hash salé via fonction lente (PBKDF2-SHA256)")
AUTH_003 = Invariant("AUTH_003", "Comparaison de hash en temps constant")
AUTH_004 = Invariant("AUTH_004", "Email normalisé et conforme à la grammaire stricte")
AUTH_005 = Invariant("AUTH_005", "Email unique dans le store")
AUTH_006 = Invariant("AUTH_006", "Échec login générique (utilisateur absent = mauvais mot de passe)")

# ══════════════════════════════════════════════════════════════════════════════
# TOKENS DE SESSION (TOK_001-005) - 5 règles
# ══════════════════════════════════════════════════════════════════════════════

TOK_001 = Invariant("TOK_001", "Signature vérifiable uniquement avec le secret serveur")
TOK_002 = Invariant("TOK_002", "expires_at strictement postérieur à issued_at")
TOK_003 = Invariant("TOK_003", "Token rejeté si now > expires_at")
TOK_004 = Invariant("TOK_004", "Secret injecté par configuration, jamais codé en dur")
TOK_005 = Invariant("TOK_005", "Vérification sans état serveur (pas de révocation)")

# ══════════════════════════════════════════════════════════════════════════════
# PAGINATION (PAGE_001-005) - 5 règles
# ══════════════════════════════════════════════════════════════════════════════

PAGE_001 = Invariant("PAGE_001", "page entier >= 1, défaut 1")
PAGE_002 = Invariant("PAGE_002", "limit dans l'ensemble autorisé, défaut 10")
PAGE_003 = Invariant("PAGE_003", "Valeur invalide rejetée, jamais corrigée silencieusement")
PAGE_004 = Invariant("PAGE_004", "total_pages = ceil(total_items / limit)")
PAGE_005 = Invariant("PAGE_005", "Page au-delà de total_pages = liste vide, pas d'erreur")

# ══════════════════════════════════════════════════════════════════════════════
# CATALOGUE (CAT_001-004) - 4 règles
# ══════════════════════════════════════════════════════════════════════════════

CAT_001 = Invariant("CAT_001", "Dimensions et poids produit strictement positifs")
CAT_002 = Invariant("CAT_002", "Volume et densité dérivés, jamais stockés")
CAT_003 = Invariant("CAT_003", "offset = (page - 1) * limit")
CAT_004 = Invariant("CAT_004", "Total calculé par requête COUNT séparée")

# ══════════════════════════════════════════════════════════════════════════════
# ERREURS (ERR_001-003) - 3 règles
# ══════════════════════════════════════════════════════════════════════════════

ERR_001 = Invariant("ERR_001", "Toute erreur métier typée et mappée vers un statut HTTP")
ERR_002 = Invariant("ERR_002", "Aucune exception non gérée exposée au transport")
ERR_003 = Invariant("ERR_003", "Erreur infrastructure propagée, jamais relancée par le core")

# ══════════════════════════════════════════════════════════════════════════════
# LOGGING (LOG_001-004) - 4 règles
# ══════════════════════════════════════════════════════════════════════════════

LOG_001 = Invariant("LOG_001", "Format JSON structuré obligatoire")
LOG_002 = Invariant("LOG_002", "Champs obligatoires: timestamp, level, correlation_id, message")
LOG_003 = Invariant("LOG_003", "Timestamp format ISO 8601 avec timezone UTC")
LOG_004 = Invariant("LOG_004", "Données sensibles JAMAIS en clair (masquées)")

# ══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION (CFG_001-006) - 6 règles
# ══════════════════════════════════════════════════════════════════════════════

CFG_001 = Invariant("CFG_001", "Secret de signature >= 32 octets")
CFG_002 = Invariant("CFG_002", "TTL token entre 1 et 86400 secondes")
CFG_003 = Invariant("CFG_003", "Itérations PBKDF2 >= 100000")
CFG_004 = Invariant("CFG_004", "Longueur minimale mot de passe >= 8", Severity.WARNING)
CFG_005 = Invariant("CFG_005", "Niveau de log minimal connu (DEBUG à CRITICAL)")
CFG_006 = Invariant("CFG_006", "Verrouillage login: max_failed_logins >= 0, lockout_minutes >= 1 (entiers)")


# ══════════════════════════════════════════════════════════════════════════════
# REGISTRE
# ══════════════════════════════════════════════════════════════════════════════

ALL_INVARIANTS: Final[dict[str, Invariant]] = {
    # AUTH (6)
    "AUTH_001": AUTH_001,
    "AUTH_002": AUTH_002,
    "AUTH_003": AUTH_003,
    "AUTH_004": AUTH_004,
    "AUTH_005": AUTH_005,
    "AUTH_006": AUTH_006,
    # TOK (5)
    "TOK_001": TOK_001,
    "TOK_002": TOK_002,
    "TOK_003": TOK_003,
    "TOK_004": TOK_004,
    "TOK_005": TOK_005,
    # PAGE (5)
    "PAGE_001": PAGE_001,
    "PAGE_002": PAGE_002,
    "PAGE_003": PAGE_003,
    "PAGE_004": PAGE_004,
    "PAGE_005": PAGE_005,
    # CAT (4)
    "CAT_001": CAT_001,
    "CAT_002": CAT_002,
    "CAT_003": CAT_003,
    "CAT_004": CAT_004,
    # ERR (3)
    "ERR_001": ERR_001,
    "ERR_002": ERR_002,
    "ERR_003": ERR_003,
    # LOG (4)
    "LOG_001": LOG_001,
    "LOG_002": LOG_002,
    "LOG_003": LOG_003,
    "LOG_004": LOG_004,
    # CFG (6)
    "CFG_001": CFG_001,
    "CFG_002": CFG_002,
    "CFG_003": CFG_003,
    "CFG_004": CFG_004,
    "CFG_005": CFG_005,
    "CFG_006": CFG_006,
}

# Comptage attendu par section
EXPECTED_COUNTS: Final[dict[str, int]] = {
    "AUTH": 6,
    "TOK": 5,
    "PAGE": 5,
    "CAT": 4,
    "ERR": 3,
    "LOG": 4,
    "CFG": 6,
}

TOTAL_INVARIANTS: Final[int] = len(ALL_INVARIANTS)
