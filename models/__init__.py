"""
Module-level DBStorage singleton. The app factory calls storage.reload()
with the configured DATABASE_URL before serving requests.
"""
from models.db_storage import DBStorage

storage = DBStorage()
