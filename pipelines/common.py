"""
pipelines/common.py
-------------------
Generic aggregation pipeline builder. Every listable collection describes
itself with a PipelineSpec (search fields, joins, public projection); the
PipelineSpec then builds the list pipeline and the matching count pipeline.
"""

import re


class Lookup:
    """
    A join ("populate") of an ObjectId field onto the referenced document.

    many=True keeps the joined documents as an array (e.g. rolePermissions),
    otherwise the single match is unwound in place, keeping documents whose
    reference is missing.

    Nested fields (address.city) are joined into a top-level alias and then
    copied into place with $addFields; the alias is dropped by the projection.
    """

    def __init__(self, field, from_collection, search_fields=(), many=False):
        self.field = field
        self.from_collection = from_collection
        self.search_fields = tuple(search_fields)
        self.many = many

    @property
    def alias(self):
        if "." not in self.field:
            return self.field
        return "_" + self.field.replace(".", "_")

    def stages(self):
        stages = [{
            "$lookup": {
                "from": self.from_collection,
                "localField": self.field,
                "foreignField": "_id",
                "as": self.alias,
            }
        }]
        if not self.many:
            stages.append({
                "$unwind": {"path": f"${self.alias}", "preserveNullAndEmptyArrays": True}
            })
        if self.alias != self.field:
            stages.extend(self._nested_stages())
        return stages

    def _nested_stages(self):
        # only documents that carry the parent get the joined value; a
        # dotted write on a missing parent leaves an empty one behind
        parent = self.field.rsplit(".", 1)[0]
        return [
            {"$addFields": {self.field: {
                "$cond": [{"$ifNull": [f"${parent}", False]}, f"${self.alias}", "$$REMOVE"]
            }}},
            {"$addFields": {parent: {
                "$cond": [{"$eq": [f"${parent}", {}]}, "$$REMOVE", f"${parent}"]
            }}},
        ]


def keyword_match(keyword, fields):
    """Case-insensitive substring match of keyword across fields."""
    pattern = re.escape(keyword.strip())
    return {"$match": {"$or": [
        {field: {"$regex": pattern, "$options": "i"}} for field in fields
    ]}}


class PipelineSpec:

    def __init__(self, search_fields, lookups=(), projection=()):
        self.search_fields = tuple(search_fields)
        self.lookups = tuple(lookups)
        self.projection = tuple(projection)

    def _filter_stages(self, query, keyword, populate):
        stages = []

        # 1. exact filters
        if query:
            stages.append({"$match": query})

        # 2. joins
        if populate:
            for lookup in self.lookups:
                stages.extend(lookup.stages())

        # 3. keyword search, including joined fields when populated
        if keyword and keyword.strip():
            fields = list(self.search_fields)
            if populate:
                for lookup in self.lookups:
                    fields.extend(f"{lookup.field}.{name}" for name in lookup.search_fields)
            stages.append(keyword_match(keyword, fields))

        return stages

    def build(self, query=None, keyword=None, sort_field="_id", sort_value="desc",
              page=1, limit=10, all_results=False, populate=True, projection=True):
        pipeline = self._filter_stages(query, keyword, populate)

        pipeline.append({"$sort": {sort_field: 1 if sort_value == "asc" else -1}})

        if not all_results:
            page, limit = int(page), int(limit)
            pipeline.append({"$skip": (page - 1) * limit})
            pipeline.append({"$limit": limit})

        if projection and self.projection:
            shape = {"_id": 0}
            shape.update({field: 1 for field in self.projection})
            pipeline.append({"$project": shape})

        return pipeline

    def build_count(self, query=None, keyword=None, populate=True, **unused):
        pipeline = self._filter_stages(query, keyword, populate)
        pipeline.append({"$count": "totalCount"})
        return pipeline
