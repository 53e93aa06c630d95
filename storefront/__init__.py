"""
Storefront

Authentification par identifiants et catalogue paginé.

Invariants: voir storefront.invariants.rules
"""

__version__ = "0.1.0"
