"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application.
"""

from flask_pymongo import PyMongo
from utils.logger import get_logger

logger = get_logger(__name__)

# Create a global PyMongo instance (used throughout the app)
mongo = PyMongo()


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    MONGO_URI must already be loaded into app.config (see config.py).
    """
    mongo.init_app(app)
    logger.info("MongoDB connection initialized for %s", app.config.get("MONGO_URI"))
    return mongo
