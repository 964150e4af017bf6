from utils.db import mongo
from utils.helpers import generate_code, utc_now, serialize_document


class Document:
    """
    Shared persistence helpers for every collection model.

    Subclasses set collection_name, code_field (the business code key),
    code_entity (prefix key for generate_code) and pipeline, and implement
    fields() returning their own attributes as a Mongo document.
    """

    collection_name = None
    code_field = None
    code_entity = None
    pipeline = None

    @classmethod
    def collection(cls):
        return mongo.db[cls.collection_name]

    def __init__(self, code=None, created_at=None, updated_at=None):
        self.code = code or generate_code(self.code_entity)
        now = utc_now()
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    def fields(self):
        raise NotImplementedError

    # Convert to dictionary for MongoDB
    def to_dict(self):
        document = {self.code_field: self.code}
        document.update(self.fields())
        document["createdAt"] = self.created_at
        document["updatedAt"] = self.updated_at
        return document

    def save(self):
        return self.collection().insert_one(self.to_dict())

    @classmethod
    def find_one(cls, query):
        return cls.collection().find_one(query)

    @classmethod
    def find_by_code(cls, code):
        if not code:
            return None
        return cls.collection().find_one({cls.code_field: code})

    @classmethod
    def find_by_codes(cls, codes):
        return list(cls.collection().find({cls.code_field: {"$in": list(codes)}}))

    @classmethod
    def update_by_code(cls, code, values):
        values = dict(values)
        values["updatedAt"] = utc_now()
        return cls.collection().update_one({cls.code_field: code}, {"$set": values})

    @classmethod
    def delete_by_code(cls, code):
        return cls.collection().delete_one({cls.code_field: code}).deleted_count

    # Single document through the aggregation pipeline, ready for a response
    @classmethod
    def find_details(cls, query, populate=True):
        pipeline = cls.pipeline.build(query=query, limit=1, populate=populate)
        results = list(cls.collection().aggregate(pipeline))
        return serialize_document(results[0]) if results else None

    # Page of documents plus the total matching count
    @classmethod
    def find_many(cls, query=None, populate=True, **params):
        pipeline = cls.pipeline.build(query=query, populate=populate, **params)
        count_pipeline = cls.pipeline.build_count(query=query, populate=populate, **params)

        results = [serialize_document(doc) for doc in cls.collection().aggregate(pipeline)]
        counted = list(cls.collection().aggregate(count_pipeline))
        total = counted[0]["totalCount"] if counted else 0
        return results, total
