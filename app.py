"""Development entrypoint: ``python app.py`` serves the API on localhost:5000."""

from src.ram_points.ram_points.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
