from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# Keep loaded rows usable after the per-operation commit.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
