from pathlib import Path
from flask import Flask, redirect, url_for


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # Basis-Konfiguration
    app.config.from_object("hypertrophy.config")
    app.config.from_mapping(
        DATABASE=str(Path(app.instance_path) / "hypertrophy.db"),
        SQLALCHEMY_DATABASE_URI="sqlite:///" + str(Path(app.instance_path) / "profiles.db").replace("\\", "/"),
    )

    # Lokale Einstellungen aus instance/config.py (optional)
    app.config.from_pyfile("config.py", silent=True)

    # Test-Config überschreibt alles (z. B. für Tests)
    if test_config:
        app.config.update(test_config)

    # Instance-Ordner sicherstellen
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    # Lokaler Key-Value-Speicher
    from .db import close_db, init_app
    app.teardown_appcontext(close_db)
    init_app(app)

    # Cloud-Profile (Flask-SQLAlchemy)
    from .models.profile import db as profile_db
    profile_db.init_app(app)
    with app.app_context():
        profile_db.create_all()

    from .services.sync import SyncBridge
    app.extensions["sync_bridge"] = SyncBridge(
        app.config["SYNC_BASE_URL"],
        timeout=app.config["SYNC_TIMEOUT"],
    )

    # Healthcheck
    @app.get("/health")
    def health():
        from .db import get_db
        _ = get_db()
        return {"status": "ok"}

    @app.get("/")
    def index():
        return redirect(url_for("tracker.show_tab", tab="dashboard"))

    # Blueprints registrieren
    from .blueprints.tracker import bp as tracker_bp
    app.register_blueprint(tracker_bp)

    from .blueprints.identity import bp as identity_bp
    app.register_blueprint(identity_bp)

    from .blueprints.cloud import bp as cloud_bp
    app.register_blueprint(cloud_bp)

    from hypertrophy.routes.progress import progress_bp
    app.register_blueprint(progress_bp)

    from hypertrophy.seed import seed_command
    app.cli.add_command(seed_command)

    return app
