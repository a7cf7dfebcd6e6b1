# collectmyitem.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH)

PUBLIC_DIR = BASE_DIR / "public"

"""
Configuration centrale du service.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, BOOKINGS_FILE)
- Normalise et expose les secrets Stripe, l'URL publique et le port d'écoute
- Fournit la politique de tarification du trajet (zone ou forfait)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# Port d'écoute (uvicorn) et URL publique utilisée pour les redirections Stripe
PORT = int(os.getenv("PORT") or 4242)
BASE_URL = _clean_env(os.getenv("BASE_URL") or f"http://localhost:{PORT}").rstrip("/")

# Stripe: clé secrète et secret de signature des webhooks
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")

# Pages de succès/annulation du checkout (servies depuis public/)
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/success.html")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/cancel.html")
CHECKOUT_CURRENCY = _clean_env(os.getenv("CHECKOUT_CURRENCY") or "gbp").lower()

# Fichier JSON des réservations (relatif au répertoire de travail du serveur)
BOOKINGS_FILE = Path(_clean_env(os.getenv("BOOKINGS_FILE") or "bookings.json"))

# Tarif du trajet: "zone" (codes postaux) ou "flat" (forfait)
TRAVEL_POLICY = _clean_env(os.getenv("TRAVEL_POLICY") or "zone").lower()

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
