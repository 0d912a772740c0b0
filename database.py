# database.py
from motor.motor_asyncio import AsyncIOMotorClient
from bson import ObjectId
import config

client = AsyncIOMotorClient(config.MONGODB_URI)
db = client[config.MONGODB_DB]


def get_db():
    """FastAPI dependency returning the application database."""
    return db


async def init_db(database=None):
    database = database if database is not None else db
    await database.users.create_index("id", unique=True)
    await database.users.create_index("email", unique=True)
    await database.questions.create_index("exam")
    await database.exam_results.create_index([("userId", 1), ("completedAt", -1)])


def to_str_id(doc):
    """Return a copy of a Mongo document with `_id` exposed as a string `id`."""
    if not doc:
        return doc
    d = dict(doc)
    if d.get("_id") is not None:
        d["id"] = str(d.pop("_id"))
    for key in ("exam", "createdBy"):
        if isinstance(d.get(key), ObjectId):
            d[key] = str(d[key])
    if isinstance(d.get("questions"), list):
        d["questions"] = [
            to_str_id(q) if isinstance(q, dict) else str(q)
            for q in d["questions"]
        ]
    if isinstance(d.get("options"), list):
        d["options"] = [
            {k: (str(v) if isinstance(v, ObjectId) else v) for k, v in o.items()} if isinstance(o, dict) else o
            for o in d["options"]
        ]
    return d
