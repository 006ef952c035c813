#!/usr/bin/env python3
"""
Entry point for the PadelScore API.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development or production (default: development)
    PORT: Port to run on (default: 3001)
    FRONTEND_URL: Origin allowed by CORS (default: http://localhost:5000)
    DATABASE_URL: SQLAlchemy database URL (default: sqlite:///padelscore.db)
"""
import logging
import os


def run_api():
    """Run the API server."""
    from padelscore.app import create_app
    
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    
    env = os.getenv('FLASK_ENV', 'development')
    app = create_app(env)
    port = app.config['PORT']
    
    app.logger.info(f"PADELSCORE Backend API server running on port {port}")
    app.logger.info(f"Environment: {env}")
    # Live streams hold a worker each, so serve requests on threads
    app.run(host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False), threaded=True)


if __name__ == '__main__':
    run_api()
