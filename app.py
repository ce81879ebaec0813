"""
Hypertrophy App – Progressive-Overload-Tracker
----------------------------------------------
Flask-basierte Webanwendung zum Loggen von Übungen, Sätzen, Wiederholungen,
Gewicht und RPE, mit Dashboard-Kennzahlen und optionalem Cloud-Sync.

Start (Entwicklung):
    python app.py
"""

from hypertrophy import create_app

app = create_app()


# ------------------------------------------------------------
# App-Startpunkt
# ------------------------------------------------------------

if __name__ == "__main__":
    print(f"[Hypertrophy] Läuft mit Datenbank: {app.config['DATABASE']}")
    app.run(debug=True)
