# Import the application
from smartbin.config import active_config
from smartbin.core.app import create_app

app = create_app(active_config)

# Expose app for gunicorn
application = app

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=app.config.get('DEBUG', False))
