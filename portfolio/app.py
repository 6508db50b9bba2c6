import os

from .main import create_app

# Create Flask app
app = create_app()

if __name__ == "__main__":
    # Use PORT from environment or default to 5000 for local development
    port = int(os.getenv("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_ENV") != "production")
