"""Configuration — variables d'environnement."""
import os

MAX_NESTING_DEPTH = int(os.getenv("PAGE_GUARD_MAX_DEPTH", "4"))  # section → conteneur → conteneur → contenu
COLLECT_ALL_STRUCTURAL = os.getenv("PAGE_GUARD_COLLECT_ALL", "").lower() in ("1", "true", "yes")
