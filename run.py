# run.py
"""
Development server entry point. Production deployments point a WSGI
server at unitturn.app_factory:create_app instead.
"""
import os
from unitturn.app_factory import create_app
from unitturn.db.auto_init import auto_init
from unitturn.logger import get_logger

logger = get_logger(__name__)


def main():
    # create_app exports DATABASE_URL before anything touches the engine
    app = create_app()
    logger.info("DB URI: %s", app.config["DATABASE_URL"])

    auto_init()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "0") == "1"

    app.run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    main()
