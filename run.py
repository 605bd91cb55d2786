import os
from app import create_app

# Create application with automatic environment detection
application = create_app()

if __name__ == '__main__':
    # Get configuration for development server settings
    debug_mode = application.config.get('DEBUG', False)
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', 5000))

    print(f"Starting TidyTask backend in {os.environ.get('FLASK_ENV', 'production')} mode")
    print(f"Debug mode: {debug_mode}")
    print(f"Allowed CORS origins: {application.config.get('CORS_ORIGINS')}")

    application.run(debug=debug_mode, host=host, port=port)
