"""Application entry point.

Serve with any WSGI server (e.g. ``gunicorn run:app``); running this file
directly starts the Flask development server.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from ledgerdesk import create_app

app = create_app()

if __name__ == '__main__':
    import os

    port = int(os.environ.get('PORT', 5054))
    app.run(host='0.0.0.0', port=port, debug=os.environ.get('FLASK_DEBUG', 'false').lower() == 'true')
