"""
Hypertrophy App – Standardkonfiguration
---------------------------------------
Wird von `create_app` per `app.config.from_object` geladen. Lokale bzw.
sensible Werte gehören in `instance/config.py`, das danach mit
`app.config.from_pyfile("config.py", silent=True)` darübergelegt wird.

DATABASE und SQLALCHEMY_DATABASE_URI werden in `create_app` relativ zum
Instance-Ordner gesetzt, falls sie hier fehlen.
"""

# ⚙️ Flask-Grundeinstellungen
SECRET_KEY = "dev"                  # Bitte ändern für Produktivbetrieb!
SQLALCHEMY_TRACK_MODIFICATIONS = False

# ☁️ Cloud-Sync (Profil-Speicher des Identity-Providers)
SYNC_BASE_URL = "http://127.0.0.1:5000/api"
SYNC_TIMEOUT = None                 # None = Default des Transports
SYNC_ON_SIGN_IN = True

# 🔑 Header, über den der Identity-Provider die User-ID durchreicht
IDENTITY_HEADER = "X-Auth-User"

# 📈 Dashboard
RECENT_ENTRIES = 5
WEIGHT_UNIT = "lbs"
