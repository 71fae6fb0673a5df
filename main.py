import os

from src.app_factory import create_app


if __name__ == "__main__":
    """
    Entrypoint for the clinic admin API (development server).
    In production serve `src.app_factory:create_app()` from a WSGI server instead.
    """
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 5001)), debug=app.config.get("DEBUG", False))
