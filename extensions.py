# extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Store connector. Bound to an app in create_app; repositories never import it
# and receive db.session through the service registry instead.
db = SQLAlchemy()
migrate = Migrate()
