import pymongo
from fastapi import HTTPException

from .config import Settings
from .logging_config import logger

mongo_client = None
mongo_db = None


def init_database(settings: Settings):
    global mongo_client, mongo_db
    try:
        mongo_client = pymongo.MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=3000,
            connectTimeoutMS=3000,
            socketTimeoutMS=3000,
            maxPoolSize=10,
            waitQueueTimeoutMS=3000
        )
        mongo_client.admin.command("ping")
        mongo_db = mongo_client[settings.database]
        logger.info("MongoDB connection established")
    except Exception as e:
        logger.error(f"MongoDB connection failed: {e}")
        raise


def get_database():
    if mongo_db is None:
        raise HTTPException(status_code=503, detail="MongoDB database unavailable")
    return mongo_db


def check_database_connection(db):
    try:
        db.client.admin.command("ping")
    except Exception as e:
        logger.error(f"MongoDB connection lost: {e}")
        raise HTTPException(status_code=503, detail="MongoDB database unavailable")


def reset_mongodb(db):
    try:
        for collection_name in db.list_collection_names():
            db[collection_name].drop()
        logger.info("MongoDB collections reset")
    except Exception as e:
        logger.error(f"Failed to reset MongoDB: {e}")
        raise
