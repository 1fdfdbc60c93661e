"""
Trip Store Backend
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the tripstore package.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
)

from tripstore import create_app  # noqa: E402

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1', host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
