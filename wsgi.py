"""WSGI entry point for the task service."""

import logging
import os

from task_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))

if __name__ == "__main__":
    logging.getLogger(__name__).info(
        "Tasks service listening on port %s", app.config["PORT"]
    )
    app.run(host="0.0.0.0", port=app.config["PORT"])
