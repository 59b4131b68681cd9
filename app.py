"""Development entrypoint: ``python app.py`` (or ``flask --app app run``)."""

from src.employee_directory.employee_directory.main import create_app

app = create_app()


if __name__ == "__main__":
    container = app.extensions["employee_directory"]
    app.run(host="0.0.0.0", port=container.settings.port, debug=container.settings.debug)
