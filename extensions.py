"""Flask extension instances.

Extensions are created here without an app and bound in `create_app`, so that
models and services can import them without importing the application.
"""
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_mail import Mail
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
mail = Mail()
cors = CORS()
