from khelbharat.extensions import db
import khelbharat.models  # noqa: F401  registers every model on db.metadata


def init_db(app):
    with app.app_context():
        db.create_all()
